"""Command-line interface for the rummy engine."""
