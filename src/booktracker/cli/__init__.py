"""Command-line interface for booktracker."""
