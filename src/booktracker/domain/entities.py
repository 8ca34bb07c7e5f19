"""
Domain entities for booktracker.

A Book is valid by construction: instances only come out of the record
codec, which rejects anything that breaks the field rules.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Book:
    """One catalog entry."""

    title: str
    author: str
    isbn: str  # exactly 13 decimal digits
    copies: int  # > 0

    @property
    def sort_key(self) -> str:
        """Catalog ordering key (case-insensitive title)."""
        return self.title.lower()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
