"""Command-line interface for the recall scheduler."""
