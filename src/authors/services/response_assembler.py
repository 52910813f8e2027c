"""
Response assembly for the authors posts listing.

Turns a shaped author queryset into an ``AuthorsResponse``: optional totals,
the pagination window, and the per-author post aggregates computed from the
prefetched public posts.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Sequence

from django.db.models.query import QuerySet
from django.utils import timezone
from django.utils.text import Truncator

from authors.columns import FULL_NAME, NAME_COLUMN, AuthorProjection
from authors.dto import AuthorsResponse
from authors.models import Author, Post
from authors.repositories import PUBLIC_POSTS_ATTR

LAST_MONTH_DAYS = 30
LATEST_POST_CONTENT_LIMIT = 100
HIDDEN_UNLESS_REQUESTED = ("first_name", "last_name")


def _published_sort_key(post: Post) -> tuple[bool, Any]:
    # Posts without a publication date rank below every dated post.
    return (post.published_at is not None, post.published_at)


def _published_on(post: Post) -> date:
    published_at = post.published_at
    if timezone.is_aware(published_at):
        published_at = timezone.localtime(published_at)
    return published_at.date()


def _average(values: Sequence[Decimal | int | float]) -> float | None:
    if not values:
        return None
    return float(sum(values) / len(values))


class AuthorsResponseAssembler:
    """
    Executes an author queryset and builds the listing response.

    Order matters: totals are counted on the filtered queryset before the
    pagination window is applied, and pagination happens right before the
    rows are fetched.
    """

    def assemble(
        self,
        queryset: QuerySet[Author],
        *,
        projection: AuthorProjection,
        include_totals: bool = False,
        offset: int = 0,
        limit: int | None,
        today: date | None = None,
    ) -> AuthorsResponse:
        """Count, paginate, fetch and transform the authors."""
        total_authors_count, filtered_authors_count = self.compute_totals(
            queryset, include_totals
        )
        page = self.paginate(queryset, offset=offset, limit=limit)

        return AuthorsResponse(
            authors=self.transform(page, projection, today=today),
            total_authors_count=total_authors_count,
            filtered_authors_count=filtered_authors_count,
        )

    def compute_totals(
        self, queryset: QuerySet[Author], include_totals: bool
    ) -> tuple[int | None, int | None]:
        """
        Count all authors and the authors matching the current filters.

        Returns:
            ``(total, filtered)``, or ``(None, None)`` when totals are not
            requested.
        """
        if not include_totals:
            return None, None
        return Author.objects.count(), queryset.count()

    def paginate(
        self, queryset: QuerySet[Author], *, offset: int = 0, limit: int | None
    ) -> QuerySet[Author]:
        """Apply a skip-then-take window; ``limit=None`` leaves it open-ended."""
        start = offset or 0
        stop = start + limit if limit is not None else None
        return queryset[start:stop]

    def transform(
        self,
        rows: Iterable[Author],
        projection: AuthorProjection,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """Build the output record for every fetched author."""
        today = today or timezone.localdate()
        return [self.transform_author(author, projection, today) for author in rows]

    def transform_author(
        self, author: Author, projection: AuthorProjection, today: date
    ) -> dict[str, Any]:
        """
        Build one author record.

        Stored columns come from the projection, ``first_name`` and
        ``last_name`` only when the client asked for them by name. The posts
        are used for the aggregates and never emitted.
        """
        posts = self.get_public_posts(author)
        last_month_posts = self.get_last_month_posts(posts, today)

        record: dict[str, Any] = {}
        for column in projection.columns:
            if column.is_derived:
                record[column.name] = self.get_author_full_name(author)
            elif column.name in HIDDEN_UNLESS_REQUESTED and not projection.is_requested(
                column.name
            ):
                continue
            elif column.field is not None:
                record[column.name] = getattr(author, column.field.attname)

        record.setdefault(NAME_COLUMN, self.get_author_full_name(author))
        record["total_posts_count"] = len(posts)
        record["last_month_posts_count"] = len(last_month_posts)
        record["latest_post"] = self.get_latest_post(posts)
        record["average_rating"] = _average([post.rating for post in posts])
        record["average_rating_last_month"] = _average(
            [post.rating for post in last_month_posts]
        )
        return record

    def get_public_posts(self, author: Author) -> list[Post]:
        """Return the prefetched public posts, loading them if the author wasn't prefetched."""
        posts = getattr(author, PUBLIC_POSTS_ATTR, None)
        if posts is None:
            posts = author.posts.public().order_by("id")
        return list(posts)

    def get_author_full_name(self, author: Author) -> str:
        """Prefer the SQL-synthesized name, fall back to the model property."""
        full_name = getattr(author, FULL_NAME.alias or "", None)
        if full_name is None:
            full_name = author.name
        return full_name

    def get_last_month_posts(self, posts: Iterable[Post], today: date) -> list[Post]:
        """
        Return posts published within the trailing 30 days.

        The comparison is date-only and inclusive: a post published exactly
        30 days before ``today`` counts, one published 31 days before does not.
        """
        since = today - timedelta(days=LAST_MONTH_DAYS)
        return [
            post
            for post in posts
            if post.published_at is not None and _published_on(post) >= since
        ]

    def get_latest_post(self, posts: Sequence[Post]) -> dict[str, str] | None:
        """
        Summarize the most recently published post.

        Ties on ``published_at`` go to the first post in id order.
        """
        if not posts:
            return None

        latest = max(posts, key=_published_sort_key)
        return {
            "title": latest.title,
            "content": Truncator(latest.content).chars(LATEST_POST_CONTENT_LIMIT),
        }
