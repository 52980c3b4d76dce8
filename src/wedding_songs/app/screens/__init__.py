"""Textual screens for the wedding-songs app."""
