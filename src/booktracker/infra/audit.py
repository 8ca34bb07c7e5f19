"""
Append-only audit file for rejected catalog input.

Each rejection becomes one human-readable line:

    [2026-10-18T09:15:02.118204] INVALID: "Dune:Frank Herbert:123:3" - InvalidISBN: ISBN must be ...

The file is never read back by booktracker. Writing to it must never abort
the operation that produced the rejection, so write failures are reported on
stderr and swallowed.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from .exceptions import BookTrackerError
from .logging import get_logger
from .settings import settings

_log = get_logger(__name__)


class AuditLog:
    """Error log sink for rejected records and failed operations."""

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        file_name: str | None = None,
        encoding: str | None = None,
    ) -> None:
        """
        Initialize the audit sink.

        Args:
            path: Audit file location. When None the sink writes to
                ``<cwd>/<file_name>`` until :meth:`relocate` is called.
            file_name: Audit file name used for the fallback location
            encoding: Text encoding of the audit file
        """
        self.path = Path(path) if path is not None else None
        self.file_name = file_name or settings.audit_file_name
        self.encoding = encoding or settings.catalog_encoding

    @property
    def target(self) -> Path:
        """Where the next entry will be written."""
        if self.path is not None:
            return self.path
        return Path.cwd() / self.file_name

    def relocate(self, directory: Path | str) -> None:
        """Place the audit file in ``directory`` (normally the catalog's folder)."""
        self.path = Path(directory) / self.file_name

    def record(self, raw_text: str, error_kind: str, message: str) -> bool:
        """
        Append one entry to the audit file.

        Args:
            raw_text: The offending input, verbatim
            error_kind: Error kind tag (e.g. "MalformedRecord")
            message: Human-readable failure reason

        Returns:
            True when the entry was written, False when the write failed
        """
        entry = (
            f"[{datetime.now().isoformat()}] INVALID: \"{raw_text}\" - "
            f"{error_kind}: {message}\n"
        )
        target = self.target
        try:
            with open(target, "a", encoding=self.encoding) as f:
                f.write(entry)
        except OSError as e:
            print(f"Failed to write to {target.name}: {e}", file=sys.stderr)
            _log.warning("audit_write_failed", path=str(target), error=str(e))
            return False
        return True

    def record_error(self, raw_text: str, error: BookTrackerError) -> bool:
        """Append an entry for a booktracker error, using its kind tag."""
        return self.record(raw_text, error.kind, str(error))


__all__ = ["AuditLog"]
