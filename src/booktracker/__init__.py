"""
booktracker - a flat-file library book catalog.

Search a catalog by ISBN or title substring, or append a validated
``title:author:isbn:copies`` record.
"""

__version__ = "1.0.0"
