"""Caller identity for hotel endpoints.

Trust Model:
- API Gateway validates the JWT before the request reaches this service
- After validation it injects x-user-sub (principal id) and x-user-role
- The backend trusts these headers since they come from API Gateway, not the client
"""

from dataclasses import dataclass
from typing import Callable

from fastapi import HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from hotel_shared.models import EntityId, UserRole
from hotel_shared.utils.logging import get_logger

logger = get_logger(__name__)

USER_SUB_HEADER = "x-user-sub"
USER_ROLE_HEADER = "x-user-role"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    user_id: EntityId
    role: UserRole


def get_principal(request: Request) -> Principal:
    """Extract the calling principal from gateway headers.

    Args:
        request: FastAPI request object

    Returns:
        Principal with canonical user id and role

    Raises:
        HTTPException: 401 if the principal id is missing
    """
    raw_sub = (request.headers.get(USER_SUB_HEADER) or "").strip()
    if not raw_sub:
        logger.warning("auth_user_sub_missing", extra={"path": request.url.path})
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Authentication required: user id not found",
        )

    raw_role = (request.headers.get(USER_ROLE_HEADER) or "").strip().lower()
    try:
        role = UserRole(raw_role) if raw_role else UserRole.USER
    except ValueError:
        logger.warning(
            "auth_unknown_role",
            extra={"path": request.url.path, "role": raw_role},
        )
        role = UserRole.USER

    return Principal(user_id=EntityId.parse(raw_sub), role=role)


def require_role(*roles: UserRole) -> Callable[[Request], Principal]:
    """Create a dependency that only admits the given roles.

    Usage:
        @router.get("/admin")
        def handler(principal: Principal = Depends(require_role(UserRole.ADMIN))):
            ...
    """

    def dependency(request: Request) -> Principal:
        principal = get_principal(request)
        if principal.role not in roles:
            logger.warning(
                "auth_role_denied",
                extra={"path": request.url.path, "role": principal.role.value},
            )
            raise HTTPException(
                status_code=HTTP_403_FORBIDDEN,
                detail=f"Role '{principal.role.value}' may not access this endpoint",
            )
        return principal

    return dependency


require_owner = require_role(UserRole.OWNER)
require_admin = require_role(UserRole.ADMIN)
