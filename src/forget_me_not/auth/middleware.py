"""
Authentication dependency for JWT validation.

Tokens are read from the ``Authorization: Bearer`` header, falling back to
the ``access_token`` cookie so the HTML pages work from a browser session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field

from forget_me_not.auth.jwt import JWTHandler
from forget_me_not.config import Settings, get_settings
from forget_me_not.shared.exceptions import InvalidTokenError, TokenExpiredError
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"


class CurrentUser(BaseModel):
    """Current authenticated user information."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Subject identifier")
    email: str = Field("", description="User email")
    role: str = Field(..., description="User role")
    permissions: tuple[str, ...] = Field((), description="Extra permissions granted by the token")


def _unauthorized(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Extract and validate current user from the JWT token."""
    token = credentials.credentials if credentials is not None else None
    if not token:
        token = request.cookies.get(ACCESS_TOKEN_COOKIE)

    if not token:
        logger.warning(
            "Missing authentication credentials",
            extra={
                "endpoint": str(request.url.path),
                "method": request.method,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        raise _unauthorized("MISSING_CREDENTIALS", "Authentication credentials required")

    try:
        payload = JWTHandler(settings).validate_access_token(token)
    except TokenExpiredError:
        logger.info(
            "Token expired",
            extra={"endpoint": str(request.url.path), "method": request.method},
        )
        raise _unauthorized("TOKEN_EXPIRED", "Token has expired")
    except InvalidTokenError as e:
        logger.warning(
            "Invalid token",
            extra={
                "endpoint": str(request.url.path),
                "method": request.method,
                "error": e.message,
            },
        )
        raise _unauthorized(e.code, e.message)

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not role:
        raise _unauthorized("INVALID_TOKEN", "Token missing subject or role")

    permissions = payload.get("permissions") or []
    if not isinstance(permissions, list):
        permissions = []

    return CurrentUser(
        id=str(subject),
        email=payload.get("email", "") or "",
        role=str(role),
        permissions=tuple(str(p) for p in permissions),
    )


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
