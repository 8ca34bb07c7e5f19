"""
Operation dispatcher: turns (catalog path, operation token) into a result.

Lifecycle of one run:

    IDLE -> LOADED -> SEARCHING | ADDING -> REPORTED
                                  \\-> FAILED (ISBN search hit duplicates)

The token's shape picks the operation, in priority order:

1. exactly 13 decimal digits   -> ISBN search
2. exactly 4 ``:`` fields       -> add (trailing empty fields do not count)
3. anything else                -> title substring search

Rejected records and duplicate ISBNs are written to the audit file and
counted in ``RunStats.errors``. A rejected add is a normal result; an ISBN
search that finds several books aborts with DuplicateISBNError because the
catalog file is corrupted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..catalog import codec
from ..catalog.store import CatalogStore
from ..domain.entities import Book
from ..infra.audit import AuditLog
from ..infra.exceptions import (
    CatalogRecordError,
    DuplicateISBNError,
    InsufficientArgumentsError,
    InvalidFileNameError,
    StartupError,
)
from ..infra.logging import get_logger
from ..infra.settings import Settings
from ..infra.settings import settings as default_settings
from ..shared.types import DispatchState, OperationKind

_log = get_logger(__name__)

USAGE = "Usage: booktracker <catalogFile.txt> <operationArgument>"
STARTUP_RAW_TEXT = "<startup>"


@dataclass
class RunStats:
    """Counters reported at the end of a run."""

    records_loaded: int = 0
    search_results: int = 0
    books_added: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "records_loaded": self.records_loaded,
            "search_results": self.search_results,
            "books_added": self.books_added,
            "errors": self.errors,
        }


@dataclass
class OperationResult:
    """Outcome of one executed operation."""

    kind: OperationKind
    token: str
    books: list[Book] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)
    error: CatalogRecordError | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.kind.value,
            "token": self.token,
            "books": [b.to_dict() for b in self.books],
            "stats": self.stats.to_dict(),
            "error": (
                {"kind": self.error.kind, "message": str(self.error)}
                if self.error is not None
                else None
            ),
        }


def classify_operation(token: str) -> OperationKind:
    """Decide which operation a token asks for."""
    if codec.is_isbn(token):
        return OperationKind.ISBN_SEARCH
    if len(codec.split_fields(token)) == codec.FIELD_COUNT:
        return OperationKind.ADD
    return OperationKind.TITLE_SEARCH


def validate_catalog_path(catalog_path: str, suffixes: Sequence[str]) -> Path:
    """
    Check the catalog file name ends in an accepted suffix.

    Raises:
        InvalidFileNameError: suffix not accepted (comparison is case-insensitive)
    """
    if not catalog_path.lower().endswith(tuple(suffixes)):
        expected = ", ".join(suffixes)
        raise InvalidFileNameError(
            f"Catalog file must end with {expected}, got: {catalog_path}"
        )
    return Path(catalog_path)


def ensure_catalog_file(path: Path) -> None:
    """Create the catalog file and its parent directories if absent."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()


class OperationDispatcher:
    """
    Runs one catalog operation and accumulates its statistics.

    Owns the catalog store, the audit sink and the run counters for the
    lifetime of a single invocation.
    """

    def __init__(self, settings: Settings | None = None, audit: AuditLog | None = None) -> None:
        self.settings = settings or default_settings
        self.audit = audit or AuditLog(
            file_name=self.settings.audit_file_name,
            encoding=self.settings.catalog_encoding,
        )
        self.state = DispatchState.IDLE
        self.stats = RunStats()
        self.store: CatalogStore | None = None

    def run(self, argv: Sequence[str | None]) -> OperationResult:
        """
        Full pipeline from raw positional arguments.

        Args:
            argv: ``[catalog_path, operation_token, ...]``; extra items are ignored

        Raises:
            InsufficientArgumentsError: fewer than two arguments
            InvalidFileNameError: catalog path has an unaccepted suffix
            DuplicateISBNError: ISBN search found more than one book
        """
        args = [a for a in argv if a is not None]
        try:
            if len(args) < 2:
                raise InsufficientArgumentsError(USAGE)
            self.open(args[0])
        except StartupError as e:
            self.state = DispatchState.FAILED
            self.audit.record_error(STARTUP_RAW_TEXT, e)
            raise

        return self.execute(args[1])

    def open(self, catalog_path: str) -> CatalogStore:
        """
        Validate, bootstrap and load the catalog file.

        The audit file is moved next to the catalog before loading, so load
        rejections land beside the data they refer to.
        """
        if self.state is not DispatchState.IDLE:
            raise RuntimeError(f"Catalog already opened (state={self.state.value})")

        path = validate_catalog_path(catalog_path, self.settings.suffixes)
        ensure_catalog_file(path)
        self.audit.relocate(path.parent)

        store, rejected = CatalogStore.load(
            path, self.audit, encoding=self.settings.catalog_encoding
        )
        self.store = store
        self.stats.records_loaded = len(store)
        self.stats.errors += rejected
        self.state = DispatchState.LOADED
        return store

    def execute(self, token: str) -> OperationResult:
        """Classify ``token`` and run the matching operation against the loaded catalog."""
        kind = classify_operation(token)
        if kind is OperationKind.ISBN_SEARCH:
            return self.search_by_isbn(token)
        if kind is OperationKind.ADD:
            return self.add_record(token)
        return self.search_by_title(token)

    def _begin(self, state: DispatchState) -> CatalogStore:
        # One operation per run, and only after open()
        if self.state is not DispatchState.LOADED or self.store is None:
            raise RuntimeError(f"Catalog not loaded (state={self.state.value})")
        self.state = state
        return self.store

    def search_by_isbn(self, isbn: str) -> OperationResult:
        """
        Exact ISBN lookup.

        Raises:
            DuplicateISBNError: more than one book has this ISBN (corrupted
                catalog). Audited and counted before raising.
        """
        store = self._begin(DispatchState.SEARCHING)
        matches = store.find_by_isbn(isbn)
        if len(matches) > 1:
            err = DuplicateISBNError(f"Multiple books found with ISBN {isbn}")
            self.audit.record_error(isbn, err)
            self.stats.errors += 1
            self.state = DispatchState.FAILED
            _log.warning("isbn_search_ambiguous", isbn=isbn, matches=len(matches))
            raise err

        self.stats.search_results = len(matches)
        self.state = DispatchState.REPORTED
        return OperationResult(
            kind=OperationKind.ISBN_SEARCH, token=isbn, books=matches, stats=self.stats
        )

    def search_by_title(self, keyword: str) -> OperationResult:
        store = self._begin(DispatchState.SEARCHING)
        matches = store.find_by_title(keyword)
        self.stats.search_results = len(matches)
        self.state = DispatchState.REPORTED
        return OperationResult(
            kind=OperationKind.TITLE_SEARCH, token=keyword, books=matches, stats=self.stats
        )

    def add_record(self, record: str) -> OperationResult:
        """
        Decode ``record`` and add it to the catalog.

        A malformed record or a duplicate ISBN is audited, counted, and
        returned on the result rather than raised.
        """
        store = self._begin(DispatchState.ADDING)
        try:
            book = codec.decode(record)
            store.add(book)
        except CatalogRecordError as e:
            self.stats.errors += 1
            self.audit.record_error(record, e)
            self.state = DispatchState.REPORTED
            _log.info("book_add_rejected", kind=e.kind, reason=str(e))
            return OperationResult(
                kind=OperationKind.ADD, token=record, stats=self.stats, error=e
            )

        self.stats.books_added = 1
        self.state = DispatchState.REPORTED
        _log.info("book_added", isbn=book.isbn, catalog_size=len(store))
        return OperationResult(
            kind=OperationKind.ADD, token=record, books=[book], stats=self.stats
        )


__all__ = [
    "USAGE",
    "RunStats",
    "OperationResult",
    "classify_operation",
    "validate_catalog_path",
    "ensure_catalog_file",
    "OperationDispatcher",
]
