"""
Infrastructure layer - audit file, logging, settings, and error types.
"""
