"""
Author Repositories for the application.

This file contains the data access logic for the authors app: the base
authors-with-public-posts query and the projection, filtering and sorting
applied to it. Column names coming from clients are always checked against
the column catalog before they reach the ORM.
"""

from typing import Iterable

from django.db.models import CharField, Prefetch, TextField
from django.db.models.functions import Cast
from django.db.models.lookups import Contains
from django.db.models.query import QuerySet

from .columns import (
    FULL_NAME,
    ID_COLUMN,
    NAME_COLUMN,
    NAME_PARTS,
    AuthorColumnCatalog,
    AuthorProjection,
    Column,
)
from .exceptions import UnknownFilterColumnError, UnknownSortColumnError
from .models import Author, Post

PUBLIC_POSTS_ATTR = "public_posts"


class AuthorRepository:
    """Builds and shapes author querysets."""

    def __init__(self, catalog: AuthorColumnCatalog | None = None) -> None:
        self.catalog = catalog or AuthorColumnCatalog()

    def get_author_by_id(self, author_id: int) -> Author | None:
        """Return the author with the given primary key, or None."""
        return Author.objects.filter(pk=author_id).first()

    def get_all_authors_posts_query(self) -> QuerySet[Author]:
        """
        Returns a queryset of authors with their public posts prefetched.

        The posts land on each author as ``public_posts`` (ordered by id);
        private posts are never loaded.
        """
        return Author.objects.prefetch_related(
            Prefetch(
                "posts",
                queryset=Post.objects.public().order_by("id"),
                to_attr=PUBLIC_POSTS_ATTR,
            )
        )

    def select_columns(
        self, queryset: QuerySet[Author], columns: Iterable[str]
    ) -> tuple[QuerySet[Author], AuthorProjection]:
        """
        Restrict the queryset to the requested columns.

        Args:
            queryset: The authors queryset to project.
            columns: Requested column names. Unknown names are skipped
                silently; an empty request selects every catalog column.

        Returns:
            The projected queryset and the projection describing it.
        """
        requested = list(dict.fromkeys(columns))

        if not requested:
            projection = AuthorProjection(columns=tuple(self.catalog.stored_columns()))
            return queryset, projection

        selected: list[Column] = [
            column
            for column in self.catalog.resolve_many(requested)
            if column.name != NAME_COLUMN
        ]

        if NAME_COLUMN in requested:
            names = {column.name for column in selected}
            for part in NAME_PARTS:
                if part not in names:
                    part_column = self.catalog.resolve(part)
                    if part_column is not None:
                        selected.append(part_column)
            selected.append(FULL_NAME)

        if ID_COLUMN not in {column.name for column in selected}:
            id_column = self.catalog.resolve(ID_COLUMN)
            if id_column is not None:
                selected.append(id_column)

        projection = AuthorProjection(
            columns=tuple(selected), requested=frozenset(requested)
        )

        # The name parts are always loaded so ``name`` can be built per row.
        load_fields = dict.fromkeys(
            [column.field.name for column in projection.stored if column.field]
            + list(NAME_PARTS)
        )
        queryset = queryset.only(*load_fields)
        for column in projection.derived:
            queryset = queryset.annotate(**{column.alias: column.to_expression()})

        return queryset, projection

    def sort_query_by_column(
        self,
        queryset: QuerySet[Author],
        sort_column: str | None,
        sort_direction: str = "asc",
    ) -> QuerySet[Author]:
        """
        Sort the queryset by a single column.

        ``name`` sorts by the concatenated full name; any other value must be
        a column of the author table. An empty column leaves the queryset
        untouched.

        Raises:
            UnknownSortColumnError: If the column is neither ``name`` nor a
                column of the author table.
        """
        if not sort_column:
            return queryset

        column = self.catalog.resolve(sort_column)
        if column is None:
            raise UnknownSortColumnError(sort_column)
        expression = column.to_expression()

        if sort_direction == "desc":
            return queryset.order_by(expression.desc())
        return queryset.order_by(expression.asc())

    def filter_query(
        self,
        queryset: QuerySet[Author],
        filter_column: str | None,
        filter_value: str | None,
    ) -> QuerySet[Author]:
        """
        Filter the queryset by a single column.

        Raises:
            UnknownFilterColumnError: If the column is neither ``name`` nor a
                column of the author table.
        """
        if not filter_column:
            return queryset

        if filter_column != NAME_COLUMN and not self.catalog.contains(filter_column):
            raise UnknownFilterColumnError(filter_column)

        if filter_column == "gender":
            return queryset.by_gender(filter_value)

        if filter_column == NAME_COLUMN:
            return queryset.by_name(filter_value or "")

        return self.filter_query_by_column(queryset, filter_column, filter_value or "")

    def filter_query_by_column(
        self, queryset: QuerySet[Author], filter_column: str, filter_value: str
    ) -> QuerySet[Author]:
        """
        Apply a ``LIKE %value%`` filter on a stored column.

        Columns that are not text are cast to text first so the substring
        match works for numbers and timestamps too.
        """
        column = self.catalog.resolve(filter_column)
        if column is None or column.field is None:
            raise UnknownFilterColumnError(filter_column)

        if isinstance(column.field, (CharField, TextField)):
            return queryset.filter(**{f"{column.field.name}__contains": filter_value})

        as_text = Cast(column.to_expression(), output_field=CharField())
        return queryset.filter(Contains(as_text, filter_value))
