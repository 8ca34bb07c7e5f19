"""
CatalogStore: the in-memory book catalog backed by a flat text file.

Usage:
    from booktracker.catalog.store import CatalogStore
    store, rejected = CatalogStore.load("data/books.txt", audit)
    store.find_by_title("dune")
    store.add(book)  # re-sorts and rewrites the whole file

The store owns the ISBN uniqueness check for additions. It does not repair a
file that already holds duplicate ISBNs; those are only detected by ISBN
search.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..domain.entities import Book
from ..infra.audit import AuditLog
from ..infra.exceptions import CatalogRecordError, DuplicateISBNError
from ..infra.logging import get_logger
from ..infra.settings import settings
from . import codec

_log = get_logger(__name__)


class CatalogStore:
    """Ordered collection of books loaded from, and persisted to, one file."""

    def __init__(
        self,
        path: Path | str,
        books: list[Book] | None = None,
        *,
        encoding: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.encoding = encoding or settings.catalog_encoding
        self._books: list[Book] = list(books or [])

    @classmethod
    def load(
        cls,
        path: Path | str,
        audit: AuditLog,
        *,
        encoding: str | None = None,
    ) -> tuple[CatalogStore, int]:
        """
        Read and decode every non-blank line of the catalog file.

        Loading is best-effort: a line that fails to decode is written to the
        audit file, counted, and skipped.

        Args:
            path: Catalog file (must exist)
            audit: Sink for rejected lines
            encoding: Text encoding, defaults to settings

        Returns:
            Tuple of (store with books in file order, number of rejected lines)
        """
        store = cls(path, encoding=encoding)
        rejected = 0

        with open(store.path, "r", encoding=store.encoding) as f:
            for lineno, raw in enumerate(f, start=1):
                line = codec.trim(raw)
                if not line:
                    continue
                try:
                    store._books.append(codec.decode(line))
                except CatalogRecordError as e:
                    rejected += 1
                    audit.record_error(line, e)
                    _log.info(
                        "catalog_record_rejected",
                        path=str(store.path),
                        line=lineno,
                        kind=e.kind,
                        reason=str(e),
                    )

        _log.info(
            "catalog_loaded",
            path=str(store.path),
            records=len(store._books),
            rejected=rejected,
        )
        return store, rejected

    @property
    def books(self) -> tuple[Book, ...]:
        return tuple(self._books)

    def __len__(self) -> int:
        return len(self._books)

    def find_by_isbn(self, isbn: str) -> list[Book]:
        """All books whose ISBN equals ``isbn``. More than one means a corrupted file."""
        return [b for b in self._books if b.isbn == isbn]

    def find_by_title(self, keyword: str) -> list[Book]:
        """Case-insensitive substring match on title, in catalog order."""
        needle = keyword.lower()
        return [b for b in self._books if needle in b.title.lower()]

    def add(self, book: Book) -> None:
        """
        Insert a book, re-sort by title, and rewrite the catalog file.

        Raises:
            DuplicateISBNError: the ISBN is already in the catalog. Nothing is
                changed in memory or on disk.
            OSError: the file could not be rewritten. The in-memory catalog is
                rolled back to match the file.
        """
        if any(b.isbn == book.isbn for b in self._books):
            raise DuplicateISBNError(f"ISBN {book.isbn} already exists in catalog")

        previous = list(self._books)
        self._books.append(book)
        # list.sort is stable, so equal titles keep their prior order
        self._books.sort(key=lambda b: b.sort_key)
        try:
            self.persist()
        except Exception:
            self._books = previous
            raise

    def persist(self) -> None:
        """Write the whole catalog, one record per line, replacing the file."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp, "w", encoding=self.encoding) as f:
                for book in self._books:
                    f.write(codec.encode(book) + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except Exception:
            if tmp.exists():
                tmp.unlink(missing_ok=True)
            raise

        _log.info("catalog_persisted", path=str(self.path), records=len(self._books))


__all__ = ["CatalogStore"]
