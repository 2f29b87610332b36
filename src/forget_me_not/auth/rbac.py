"""
Role and permission checks for administrative routes.
"""

from enum import Enum

from fastapi import Depends, Request

from forget_me_not.auth.middleware import CurrentUser, get_current_user
from forget_me_not.shared.exceptions import AuthorizationError
from forget_me_not.shared.logging import get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    """User roles."""

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @classmethod
    def from_string(cls, role_str: str) -> "Role":
        """Convert string to Role enum.

        Raises:
            ValueError: If role string is invalid.
        """
        try:
            return cls(role_str)
        except ValueError:
            raise ValueError(f"Invalid role: {role_str}")


class Permission(str, Enum):
    """Named capabilities checked by routes."""

    ADMINISTER_SITE_CONFIGURATION = "administer site configuration"
    VIEW_UPDATE_REPORTS = "view update reports"


class RolePermissions:
    """Which permissions each role carries."""

    GRANTS: dict[Role, frozenset[Permission]] = {
        Role.ADMIN: frozenset(Permission),
        Role.EDITOR: frozenset({Permission.VIEW_UPDATE_REPORTS}),
        Role.VIEWER: frozenset(),
    }

    @classmethod
    def for_role(cls, user_role: str) -> frozenset[Permission]:
        try:
            return cls.GRANTS.get(Role.from_string(user_role), frozenset())
        except ValueError:
            return frozenset()

    @classmethod
    def user_has(cls, user: CurrentUser, permission: Permission) -> bool:
        """Role grants plus any permissions carried on the token."""
        if permission in cls.for_role(user.role):
            return True
        return permission.value in user.permissions


class PermissionChecker:
    """Dependency enforcing a single permission."""

    def __init__(self, permission: Permission) -> None:
        self.permission = permission

    async def __call__(
        self,
        request: Request,
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        """Return the current user if authorized.

        Raises:
            AuthorizationError: If the user lacks the permission.
        """
        if not RolePermissions.user_has(current_user, self.permission):
            logger.warning(
                "Access denied",
                extra={
                    "user_id": current_user.id,
                    "user_email": current_user.email,
                    "user_role": current_user.role,
                    "required_permission": self.permission.value,
                    "endpoint": str(request.url.path),
                    "method": request.method,
                    "client_ip": request.client.host if request.client else "unknown",
                    "event_type": "access_denied",
                },
            )
            raise AuthorizationError(self.permission.value)

        logger.debug(
            "Access granted",
            extra={
                "user_id": current_user.id,
                "endpoint": str(request.url.path),
                "method": request.method,
            },
        )
        return current_user


require_site_configuration = PermissionChecker(Permission.ADMINISTER_SITE_CONFIGURATION)
