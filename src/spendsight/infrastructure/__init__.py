"""Infrastructure layer (persistence, external services, security)."""
