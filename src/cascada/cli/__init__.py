"""Command-line interface for Cascada."""
