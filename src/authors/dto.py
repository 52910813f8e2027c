"""Data transfer objects returned by the authors services."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthorsResponse:
    """
    Result of an authors posts listing.

    Attributes:
        authors: Transformed author records, in query order
        total_authors_count: Count of all authors, None unless totals were requested
        filtered_authors_count: Count after filtering and before pagination,
            None unless totals were requested
    """

    authors: list[dict[str, Any]] = field(default_factory=list)
    total_authors_count: int | None = None
    filtered_authors_count: int | None = None

    @property
    def has_totals(self) -> bool:
        return self.total_authors_count is not None
