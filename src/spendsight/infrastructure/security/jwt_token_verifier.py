"""JWT access token verification.

Tokens are issued by the identity service; this side only verifies them.
"""

from uuid import UUID

import jwt

from spendsight.application.context import UserContext
from spendsight.domain.shared.exceptions import AuthenticationError


class JWTTokenVerifier:
    """Turns a signed access token into a UserContext.

    Examples
    --------
    >>> verifier = JWTTokenVerifier(secret_key="your-secret-key")
    >>> user = verifier.verify(token)
    >>> print(user.user_id)
    """

    ALGORITHM = "HS256"

    def __init__(self, secret_key: str):
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        self._secret_key = secret_key

    def verify(self, token: str) -> UserContext:
        """Verify and decode an access token.

        Raises
        ------
        AuthenticationError
            If the token is expired, malformed, signed with another key or
            not an access token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
            )
            user_id = UUID(payload["sub"])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"Invalid token: {e}") from e
        except (KeyError, ValueError) as e:
            raise AuthenticationError(f"Malformed token payload: {e}") from e

        if payload.get("type", "access") != "access":
            raise AuthenticationError("Access token required")

        return UserContext.from_values(user_id=user_id, email=payload.get("email"))
