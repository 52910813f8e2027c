"""Exceptions raised while shaping the authors posts query."""


class ValidationError(Exception):
    """Exception raised when listing parameters cannot be applied to the query."""

    pass


class UnknownFilterColumnError(ValidationError):
    """Exception raised when filtering on a column the author table does not have."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Filter column '{column}' not found")


class UnknownSortColumnError(ValidationError):
    """Exception raised when sorting on a column the author table does not have."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Sort column '{column}' not found")
