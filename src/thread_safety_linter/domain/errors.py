"""Domain errors raised outside the analysis engine (which never raises)."""


class ThreadSafetyLinterError(Exception):
    """Base class for linter errors."""


class TreeFormatError(ThreadSafetyLinterError, ValueError):
    """A tree dump could not be turned into nodes."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column + 1})"
        super().__init__(message)
