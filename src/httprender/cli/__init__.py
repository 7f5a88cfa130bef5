"""Command-line interface for httprender."""
