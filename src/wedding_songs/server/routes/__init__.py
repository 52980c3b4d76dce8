"""API routes for the submission service."""
