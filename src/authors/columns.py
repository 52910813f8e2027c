"""
Column catalog for the author table.

The catalog is the allow-list every client-supplied column name is checked
against. Stored columns come from the live table schema (cached for a bounded
time window); the virtual ``name`` column is a derived SQL expression.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from django.conf import settings
from django.core.cache import cache as default_cache
from django.db import connection
from django.db.models import F, Field

from authors.models import Author, full_name_expression

logger = logging.getLogger(__name__)

AUTHOR_COLUMNS_CACHE_KEY = "author_columns"
DEFAULT_CACHE_TIMEOUT = 600  # 10 minutes

NAME_COLUMN = "name"
ID_COLUMN = "id"
NAME_PARTS = ("first_name", "last_name")


class ColumnKind(enum.Enum):
    """Whether a column is read from storage or computed in SQL."""

    STORED = "stored"
    DERIVED = "derived"


@dataclass(frozen=True)
class Column:
    """A column a client may project, filter or sort by."""

    name: str
    kind: ColumnKind
    field: Field | None = None
    expression: Callable[[], Any] | None = None
    alias: str | None = None  # annotation name, derived columns only

    @property
    def is_derived(self) -> bool:
        return self.kind is ColumnKind.DERIVED

    def to_expression(self) -> Any:
        """Return a fresh ORM expression addressing this column."""
        if self.expression is not None:
            return self.expression()
        if self.field is not None:
            return F(self.field.name)
        raise ValueError(f"Column '{self.name}' has neither a field nor an expression")


# SQL alias of the synthesized name; ``name`` itself is a model property.
FULL_NAME = Column(
    name=NAME_COLUMN,
    kind=ColumnKind.DERIVED,
    expression=full_name_expression,
    alias="full_name",
)


@dataclass(frozen=True)
class AuthorProjection:
    """
    Columns selected for output, plus the column names the client asked for.

    Attributes:
        columns: Projected columns in output order, ``id`` always included
        requested: The raw requested names (unknown ones included), used to
            decide whether ``first_name``/``last_name`` are shown
    """

    columns: tuple[Column, ...]
    requested: frozenset[str] = frozenset()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def stored(self) -> tuple[Column, ...]:
        return tuple(column for column in self.columns if not column.is_derived)

    @property
    def derived(self) -> tuple[Column, ...]:
        return tuple(column for column in self.columns if column.is_derived)

    def is_requested(self, name: str) -> bool:
        return name in self.requested


def _stored_fields() -> dict[str, Field]:
    """Map database column names to the author model's concrete fields."""
    return {field.column: field for field in Author._meta.concrete_fields}


class AuthorColumnCatalog:
    """
    Discovers and caches the author table's column names.

    The cache backend is injected so tests (and alternative deployments) can
    swap it; by default the process-wide Django cache is used under the fixed
    key ``author_columns``.
    """

    def __init__(self, cache: Any = None, timeout: int | None = None) -> None:
        """Initialize the catalog with a cache backend and expiry window."""
        self.cache = cache if cache is not None else default_cache
        if timeout is None:
            timeout = getattr(
                settings, "AUTHOR_COLUMNS_CACHE_TIMEOUT", DEFAULT_CACHE_TIMEOUT
            )
        self.timeout = timeout

    def existing_columns(self) -> frozenset[str]:
        """Return every column name defined on the author table."""
        return frozenset(
            self.cache.get_or_set(
                AUTHOR_COLUMNS_CACHE_KEY, self._load_columns, self.timeout
            )
        )

    def _load_columns(self) -> frozenset[str]:
        table = Author._meta.db_table
        with connection.cursor() as cursor:
            description = connection.introspection.get_table_description(
                cursor, table
            )
        columns = frozenset(info.name for info in description)
        logger.info(
            "Loaded author columns from schema.",
            extra={"table": table, "columns": sorted(columns)},
        )
        return columns

    def contains(self, name: str) -> bool:
        return name in self.existing_columns()

    def resolve(self, name: str) -> Column | None:
        """
        Look up a column by its client-facing name.

        Returns:
            The derived column for ``name``, the stored column when both the
            table and the model define it, otherwise None.
        """
        if name == NAME_COLUMN:
            return FULL_NAME
        if name not in self.existing_columns():
            return None
        field = _stored_fields().get(name)
        if field is None:
            return None
        return Column(name=name, kind=ColumnKind.STORED, field=field)

    def resolve_many(self, names: Iterable[str]) -> list[Column]:
        """Resolve names in order, silently dropping unknown ones."""
        resolved = []
        for name in names:
            column = self.resolve(name)
            if column is not None:
                resolved.append(column)
        return resolved

    def stored_columns(self) -> list[Column]:
        """Return every stored column the catalog knows, in model field order."""
        existing = self.existing_columns()
        return [
            Column(
                name=field.column,
                kind=ColumnKind.STORED,
                field=field,
            )
            for field in Author._meta.concrete_fields
            if field.column in existing
        ]
