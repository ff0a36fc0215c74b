"""Command line interface for fieldcmp."""
