"""Command line interface for crack parameter files."""
