"""Bearer token verification."""

from typing import Any, Dict, Optional, Sequence

from jose import ExpiredSignatureError, JWTError, jwt
from loguru import logger

from ....core.exceptions import AuthenticationError


class TokenVerifier:
    """Verifies signed JWT access tokens.

    Tokens are issued elsewhere; this service only checks the signature and
    expiry and returns the claims. ``sub`` is the user id.
    """

    def __init__(self, secret: str, algorithms: Sequence[str] = ("HS256",), audience: Optional[str] = None):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.audience = audience

    def verify(self, token: str) -> Dict[str, Any]:
        options = {"verify_aud": self.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options=options,
            )
        except ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except JWTError as e:
            logger.warning(f"Invalid token: {e}")
            raise AuthenticationError("Not authorized, token failed")

        if not claims.get("sub"):
            raise AuthenticationError("Not authorized, token failed")
        return claims
