"""
Shared types and enums for booktracker.

This module contains common enums that are used across the usecases and
CLI layers.
"""

from __future__ import annotations

from enum import Enum


class OperationKind(str, Enum):
    """What an operation token asks for."""

    ISBN_SEARCH = "isbn_search"
    TITLE_SEARCH = "title_search"
    ADD = "add"


class DispatchState(str, Enum):
    """Lifecycle of a single dispatcher run."""

    IDLE = "idle"
    LOADED = "loaded"
    SEARCHING = "searching"
    ADDING = "adding"
    REPORTED = "reported"
    FAILED = "failed"
