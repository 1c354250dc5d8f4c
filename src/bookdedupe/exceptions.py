"""Exception hierarchy for bookdedupe.

Every error raised on purpose by the package derives from
``BookDedupeError`` so callers can catch the whole family at once.
"""

__all__ = [
    "BookDedupeError",
    "InvalidParameterError",
    "BookNotFoundError",
    "RecordValidationError",
    "SourceError",
]


class BookDedupeError(Exception):
    """Base class for all bookdedupe errors."""


class InvalidParameterError(BookDedupeError, ValueError):
    """Raised when a caller passes an invalid threshold, limit or strategy.

    These are programming errors: the engine rejects the call before any
    grouping work starts instead of clamping the value.
    """


class BookNotFoundError(BookDedupeError, LookupError):
    """Raised when the focal book of a targeted search is not in the record set."""

    def __init__(self, book_id: int) -> None:
        """Initialize not-found error.

        Parameters
        ----------
        book_id : int
            The id that could not be resolved.
        """
        super().__init__(f"Book not found with ID: {book_id}")
        self.book_id = book_id


class RecordValidationError(BookDedupeError, ValueError):
    """Raised when an input record does not match the record schema."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        source: str | None = None,
    ) -> None:
        """Initialize validation error.

        Parameters
        ----------
        message : str
            Error message.
        index : int | None, optional
            0-based position of the offending record in its source.
        source : str | None, optional
            File or command the record came from.
        """
        super().__init__(message)
        self.index = index
        self.source = source


class SourceError(BookDedupeError):
    """Raised when a record source cannot deliver records."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialize source error.

        Parameters
        ----------
        message : str
            Error message.
        command : list[str] | None, optional
            Command line that failed, for subprocess-backed sources.
        stderr : str | None, optional
            Captured standard error of the failed command.
        """
        super().__init__(message)
        self.command = command
        self.stderr = stderr
