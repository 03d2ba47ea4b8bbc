"""Command line interface for expdb."""
