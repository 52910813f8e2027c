"""Django management command to seed fake authors and posts."""

from datetime import timedelta
from decimal import Decimal
from typing import Any

from django.core.management.base import BaseCommand, CommandParser
from django.db import transaction
from django.utils import timezone
from faker import Faker
from tqdm import tqdm

from authors.models import Author, Post, PostStatus


class Command(BaseCommand):
    """
    Seed the database with fake authors and their posts.

    Each post:
    1. Is published at a random moment within the last year
    2. Is public or private with equal probability
    3. Gets an integer rating between 1 and 10

    Usage:
        python manage.py seed_authors --authors 50 --posts 10
    """

    help = "Seed fake authors and posts"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("--authors", type=int, default=20)
        parser.add_argument("--posts", type=int, default=5, help="Posts per author")
        parser.add_argument("--seed", type=int, default=None)

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the management command."""
        fake = Faker()
        if options["seed"] is not None:
            Faker.seed(options["seed"])

        authors_count: int = options["authors"]
        posts_per_author: int = options["posts"]
        now = timezone.now()

        created_posts = 0
        with transaction.atomic():
            for _ in tqdm(range(authors_count), desc="Seeding authors", unit="author"):
                author = Author.objects.create(
                    first_name=fake.first_name(),
                    last_name=fake.last_name(),
                    gender=fake.random_element(["male", "female"]),
                )
                Post.objects.bulk_create(
                    [
                        Post(
                            author=author,
                            title=fake.sentence(),
                            content=fake.paragraph(nb_sentences=5),
                            published_at=fake.date_time_between(
                                start_date=now - timedelta(days=365),
                                end_date=now,
                                tzinfo=timezone.get_current_timezone(),
                            ),
                            is_private=fake.random_element(PostStatus.values),
                            rating=Decimal(fake.random_int(min=1, max=10)),
                        )
                        for _ in range(posts_per_author)
                    ]
                )
                created_posts += posts_per_author

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {authors_count} authors and {created_posts} posts"
            )
        )
