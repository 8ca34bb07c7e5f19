"""Domain layer for booktracker."""

from .entities import Book

__all__ = ["Book"]
