"""
Custom exceptions for booktracker operations.

Every error carries a ``kind`` tag. The tag is what the audit file records,
so it stays stable even if the class names change.
"""


class BookTrackerError(Exception):
    """Base exception for all booktracker errors."""

    kind = "BookTrackerError"


class StartupError(BookTrackerError):
    """Raised before the catalog is loaded. Always fatal for the run."""

    kind = "StartupError"


class InsufficientArgumentsError(StartupError):
    """Raised when the catalog path or the operation token is missing."""

    kind = "InsufficientArguments"


class InvalidFileNameError(StartupError):
    """Raised when the catalog path does not end in a recognized suffix."""

    kind = "InvalidFileName"


class CatalogRecordError(BookTrackerError):
    """Raised when a single record is rejected."""

    kind = "CatalogRecordError"


class MalformedRecordError(CatalogRecordError):
    """Raised when a record has the wrong shape or an invalid field."""

    kind = "MalformedRecord"


class InvalidISBNError(CatalogRecordError):
    """Raised when the ISBN field is not exactly 13 decimal digits."""

    kind = "InvalidISBN"


class DuplicateISBNError(CatalogRecordError):
    """Raised when an ISBN is not unique.

    During add this rejects the candidate. During ISBN search it means the
    catalog file itself is corrupted.
    """

    kind = "DuplicateISBN"
