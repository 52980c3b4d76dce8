"""Packaged data files (default song catalog)."""
