"""Author and Post models backing the authors posts listing."""

from django.db import models
from django.db.models.functions import Concat
from django.db.models.lookups import Contains

from apps.core.models import TimestampedModel


def full_name_expression() -> Concat:
    """SQL expression for ``first_name + " " + last_name``."""
    return Concat(
        "first_name",
        models.Value(" "),
        "last_name",
        output_field=models.CharField(),
    )


class PostStatus(models.IntegerChoices):
    """Visibility of a post, stored in ``Post.is_private``."""

    PUBLIC = 0, "Public"
    PRIVATE = 1, "Private"


class AuthorQuerySet(models.QuerySet):
    """Queryset with the author lookups used by the listing filters."""

    def by_name(self, value: str) -> "AuthorQuerySet":
        """Return authors whose full name contains ``value``."""
        return self.filter(Contains(full_name_expression(), value))

    def by_gender(self, value: str | None) -> "AuthorQuerySet":
        """Return authors with exactly the given gender."""
        return self.filter(gender=value)


class PostQuerySet(models.QuerySet):
    """Queryset with visibility helpers."""

    def public(self) -> "PostQuerySet":
        """Return only posts visible in listings."""
        return self.filter(is_private=PostStatus.PUBLIC)

    def private(self) -> "PostQuerySet":
        """Return only hidden posts."""
        return self.filter(is_private=PostStatus.PRIVATE)


class Author(TimestampedModel):
    """
    Model representing an author of posts.

    Attributes:
        first_name: Given name
        last_name: Family name
        gender: Free-form gender value (indexed for exact filtering)
        name: Read/write full name, see the property below
    """

    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=32, blank=True, db_index=True)

    objects = AuthorQuerySet.as_manager()

    class Meta:
        db_table = "authors"
        verbose_name = "Author"
        verbose_name_plural = "Authors"

    def __str__(self) -> str:
        """Return string representation of the author."""
        return self.name

    @property
    def name(self) -> str:
        """Full name, first and last name joined by a single space."""
        return f"{self.first_name} {self.last_name}"

    @name.setter
    def name(self, value: str) -> None:
        # Splits on the first space only: "Ada" -> ("Ada", ""),
        # "Mary Ann Evans" -> ("Mary", "Ann Evans").
        first_name, _, last_name = value.partition(" ")
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()


class Post(TimestampedModel):
    """
    Model representing a post written by an author.

    Only posts with ``is_private == PostStatus.PUBLIC`` take part in the
    authors posts listing.
    """

    author = models.ForeignKey(
        Author,
        on_delete=models.CASCADE,
        related_name="posts",
        help_text="The author who wrote the post.",
    )
    title = models.CharField(max_length=255)
    content = models.TextField()
    published_at = models.DateTimeField(null=True, blank=True)
    is_private = models.PositiveSmallIntegerField(
        choices=PostStatus.choices,
        default=PostStatus.PUBLIC,
        db_index=True,
    )
    rating = models.DecimalField(max_digits=4, decimal_places=2)

    objects = PostQuerySet.as_manager()

    class Meta:
        db_table = "posts"
        verbose_name = "Post"
        verbose_name_plural = "Posts"
        ordering = ["id"]

    def __str__(self) -> str:
        """Return string representation of the post."""
        return self.title
