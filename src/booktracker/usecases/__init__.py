"""
Application usecases.

CLI commands should call functions from here instead of touching the store directly.
"""

from . import operation_dispatch  # noqa: I001
