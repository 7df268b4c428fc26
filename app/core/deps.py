"""
FastAPI dependencies for authentication and authorization.

The principal decoded from the bearer token is passed explicitly into each
guard and route; nothing is stored on the request or in module state.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.errors import UnauthorizedError
from app.core.security import JWTError, decode_token

logger = logging.getLogger(__name__)

# Missing credentials are not an error here; the guards below decide
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""
    username: str
    is_admin: bool = False


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """
    Decode the bearer token, if any, into a Principal.

    Returns None when no token was sent or the token is invalid or expired.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None

    username = payload.get("username")
    if not username:
        return None

    return Principal(username=username, is_admin=bool(payload.get("isAdmin", False)))


def ensure_logged_in(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """
    Require an authenticated principal.

    Raises:
        UnauthorizedError: If no valid token was presented
    """
    if principal is None:
        raise UnauthorizedError()
    return principal


def ensure_admin(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """
    Require an authenticated administrator.

    Raises:
        UnauthorizedError: If not logged in or not an admin
    """
    if principal is None or not principal.is_admin:
        raise UnauthorizedError()
    return principal


def ensure_correct_user_or_admin(
    username: str,
    principal: Principal = Depends(ensure_logged_in),
) -> Principal:
    """
    Require that the principal is the user named in the path, or an admin.

    `username` is taken from the route's path parameter.

    Raises:
        UnauthorizedError: If not logged in, or logged in as someone else
    """
    if principal.username != username and not principal.is_admin:
        raise UnauthorizedError()
    return principal
