"""
Common dependencies for FastAPI endpoints.
"""
from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from social_api.core.exceptions import UnauthorizedError
from social_api.schemas.auth import TokenData
from social_api.services.auth import TokenService

# HTTP Bearer token security scheme; missing credentials are reported by
# require_token so the error body matches the other application errors
security = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a session from the store opened at startup and ensures it's
    closed after the request.
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenData:
    """
    Gate a route behind a valid bearer token.

    Args:
        request: Incoming request; the verified claims are stored on
            ``request.state.claims``
        credentials: Bearer token from Authorization header

    Returns:
        Verified token claims

    Raises:
        UnauthorizedError: If no bearer token was supplied
        InvalidTokenError: If the token fails verification
    """
    if credentials is None:
        raise UnauthorizedError("No credentials supplied")

    claims = token_service.verify(credentials.credentials)
    request.state.claims = claims
    return claims
