"""Security infrastructure."""

from spendsight.infrastructure.security.jwt_token_verifier import JWTTokenVerifier

__all__ = ["JWTTokenVerifier"]
