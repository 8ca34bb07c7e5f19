"""
Catalog package: record codec and the file-backed catalog store.
"""

from .codec import decode, encode
from .store import CatalogStore

__all__ = ["decode", "encode", "CatalogStore"]
