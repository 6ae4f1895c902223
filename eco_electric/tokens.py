"""Issue and verify the signed access tokens handed out at sign-in.

Tokens are stateless HS256 JWTs carrying the user's email and an ``exp``
claim; nothing is stored server side.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError

from eco_electric.config import get_settings


class InvalidTokenError(Exception):
    """Raised when a token is malformed or its signature does not match."""


class ExpiredTokenError(InvalidTokenError):
    """Raised when a token is past its expiry."""


@dataclass(frozen=True)
class Identity:
    email: str


class TokenService:
    def __init__(self, secret: str, expires_in: timedelta = timedelta(hours=1), algorithm: str = "HS256"):
        if not secret:
            raise RuntimeError("ACCESS_TOKEN_SECRET is not set. Check your .env file.")
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, email: str, expires_in: Optional[timedelta] = None) -> str:
        expires_at = datetime.now(timezone.utc) + (expires_in if expires_in is not None else self.expires_in)
        payload = {"email": email, "exp": int(expires_at.timestamp())}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Decode ``token`` and return the identity it asserts.

        Raises:
            ExpiredTokenError: the token is past its ``exp``
            InvalidTokenError: bad signature, malformed token or no email claim
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredTokenError("Token has expired")
        except JWTError as e:
            raise InvalidTokenError(str(e))

        email = claims.get("email")
        if not isinstance(email, str) or not email:
            raise InvalidTokenError("Token carries no email claim")
        return Identity(email=email)


_token_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    global _token_service
    if _token_service is None:
        settings = get_settings()
        _token_service = TokenService(
            settings.access_token_secret,
            expires_in=timedelta(seconds=settings.access_token_expires_seconds),
            algorithm=settings.jwt_algorithm,
        )
    return _token_service
