"""
Author Services for the application.

This file contains the entry point of the authors posts listing. The service
sequences the repository (query shaping) and the response assembler
(execution and transformation) so views never touch the ORM directly.
"""

import logging
from datetime import date
from typing import Iterable

from authors.dto import AuthorsResponse
from authors.models import Author
from authors.repositories import AuthorRepository
from authors.services.response_assembler import AuthorsResponseAssembler

logger = logging.getLogger(__name__)


class AuthorService:
    """Service for listing authors with aggregated statistics about their posts."""

    def __init__(
        self,
        repository: AuthorRepository | None = None,
        assembler: AuthorsResponseAssembler | None = None,
    ) -> None:
        """Initialize the service with its repository and response assembler."""
        self.repository = repository or AuthorRepository()
        self.assembler = assembler or AuthorsResponseAssembler()

    def get_authors_posts(
        self,
        *,
        columns: Iterable[str] = (),
        offset: int = 0,
        limit: int | None,
        sort_column: str | None = "first_name",
        sort_direction: str = "asc",
        filter_column: str | None = None,
        filter_value: str | None = None,
        include_totals: bool = False,
        today: date | None = None,
    ) -> AuthorsResponse:
        """
        Retrieve authors and their post statistics.

        Args:
            columns: Requested author columns; unknown names are ignored and
                an empty collection selects every column.
            offset: Number of authors to skip.
            limit: Maximum number of authors to return, None for no limit.
            sort_column: Column to sort by, ``name`` sorts by full name.
            sort_direction: ``asc`` or ``desc``.
            filter_column: Column to filter on, ``name`` filters by full name.
            filter_value: Value to match against ``filter_column``.
            include_totals: Whether to count all and filtered authors.
            today: Reference date for the last-month statistics.

        Returns:
            The assembled AuthorsResponse.

        Raises:
            UnknownFilterColumnError: If ``filter_column`` does not exist.
            UnknownSortColumnError: If ``sort_column`` does not exist.
        """
        columns = list(columns)

        queryset = self.repository.get_all_authors_posts_query()
        queryset = self.repository.sort_query_by_column(
            queryset, sort_column, sort_direction
        )
        queryset = self.repository.filter_query(queryset, filter_column, filter_value)
        queryset, projection = self.repository.select_columns(queryset, columns)

        response = self.assembler.assemble(
            queryset,
            projection=projection,
            include_totals=include_totals,
            offset=offset,
            limit=limit,
            today=today,
        )

        logger.info(
            "Authors posts listed.",
            extra={
                "columns": list(projection.names),
                "sort_column": sort_column,
                "sort_direction": sort_direction,
                "filter_column": filter_column,
                "offset": offset,
                "limit": limit,
                "returned": len(response.authors),
            },
        )
        return response

    def get_author_by_id(self, author_id: int) -> Author | None:
        """Return a single author, or None if it does not exist."""
        return self.repository.get_author_by_id(author_id)
