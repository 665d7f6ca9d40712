"""Application data transfer objects."""
