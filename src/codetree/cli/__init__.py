"""Command-line interface for codetree."""
