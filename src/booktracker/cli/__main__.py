#!/usr/bin/env python3
"""
CLI entry point for booktracker.cli module.

This allows running: python -m booktracker.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
