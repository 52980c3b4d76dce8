"""Services for the wedding-songs app."""
