"""
Authentication service - password hashing and JWT token verification.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from social_api.core.config import Settings
from social_api.core.exceptions import InvalidTokenError
from social_api.schemas.auth import TokenData

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    """Hash a plain password."""
    return pwd_context.hash(password)


class TokenService:
    """
    Signs and verifies bearer tokens with a shared secret.

    Only verification is reachable over HTTP; issuing tokens is left to
    operators and tests.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(
        self,
        subject: str,
        extra: Optional[dict] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            subject: Value of the ``sub`` claim
            extra: Additional claims to encode in the token
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token string
        """
        to_encode = dict(extra or {})
        to_encode["sub"] = subject

        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)
        to_encode["exp"] = datetime.now(timezone.utc) + expires_delta

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenData:
        """
        Decode and validate a JWT access token.

        Raises:
            InvalidTokenError: If the token is malformed, expired, signed
                with another key or carries no subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise InvalidTokenError() from e

        user_id = payload.get("sub")
        if user_id is None:
            logger.warning("Rejected bearer token without subject")
            raise InvalidTokenError()

        exp = payload.get("exp")
        return TokenData(
            user_id=str(user_id),
            username=payload.get("username"),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
        )
