"""
Record codec: one catalog line <-> one Book.

Line format is ``title:author:isbn:copies``. Surrounding whitespace on each
field is discarded on decode, so ``encode(decode(line))`` reproduces the
trimmed fields joined by ``:``.

Field rules mirror the catalog files written by the earlier tool:

- trailing empty fields are dropped before counting, so a stray trailing
  ``:`` does not change the field count
- trimming removes ASCII control characters and spaces only (code points up
  to U+0020); other Unicode whitespace such as U+00A0 is kept
- copies must fit a signed 32-bit integer
"""

from __future__ import annotations

import re

from ..domain.entities import Book
from ..infra.exceptions import InvalidISBNError, MalformedRecordError

SEPARATOR = ":"
FIELD_COUNT = 4

_ISBN_RE = re.compile(r"[0-9]{13}")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))

COPIES_MIN = -(2**31)
COPIES_MAX = 2**31 - 1


def trim(text: str) -> str:
    """Strip leading and trailing characters up to U+0020."""
    return text.strip(_TRIM_CHARS)


def split_fields(text: str) -> list[str]:
    """Split raw text on the field separator, dropping trailing empty fields.

    Empty fields in the middle are kept. An empty string is one empty field.
    """
    if not text:
        return [text]
    parts = text.split(SEPARATOR)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def is_isbn(text: str) -> bool:
    """True when ``text`` is exactly 13 ASCII decimal digits."""
    return _ISBN_RE.fullmatch(text) is not None


def decode(line: str) -> Book:
    """
    Parse and validate a ``title:author:isbn:copies`` line.

    Checks run in a fixed order and the first failure wins: field count,
    title, author, ISBN format, copies parseability, copies positivity.

    Raises:
        MalformedRecordError: wrong field count, empty title/author, bad copies
        InvalidISBNError: ISBN is not exactly 13 digits
    """
    parts = split_fields(line)
    if len(parts) != FIELD_COUNT:
        raise MalformedRecordError(
            f"Expected {FIELD_COUNT} fields separated by '{SEPARATOR}' but got {len(parts)}"
        )

    title, author, isbn, copies_raw = (trim(p) for p in parts)

    if not title:
        raise MalformedRecordError("Title must not be empty")
    if not author:
        raise MalformedRecordError("Author must not be empty")
    if not is_isbn(isbn):
        raise InvalidISBNError(f"ISBN must be exactly 13 digits, got: '{isbn}'")

    copies = int(copies_raw) if _INT_RE.fullmatch(copies_raw) else None
    if copies is None or not COPIES_MIN <= copies <= COPIES_MAX:
        raise MalformedRecordError(f"Copies must be an integer, got: '{copies_raw}'")
    if copies <= 0:
        raise MalformedRecordError(f"Copies must be > 0, got: {copies}")

    return Book(title=title, author=author, isbn=isbn, copies=copies)


def encode(book: Book) -> str:
    """Serialize a Book back to catalog line format."""
    return SEPARATOR.join([book.title, book.author, book.isbn, str(book.copies)])


__all__ = ["SEPARATOR", "FIELD_COUNT", "trim", "split_fields", "is_isbn", "decode", "encode"]
