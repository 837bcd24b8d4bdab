"""Request context and role authorization for API endpoints.

The caller's identity and role arrive as request headers set by the fronting
application (which owns login and sessions):
- X-User-Id: user id (also the legacy partner identifier)
- X-User-Role: admin | seller | partner
- X-Partner-Code: assigned partner code (partners only, optional)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from fastapi import Depends, Header, HTTPException

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Dashboard roles."""

    ADMIN = "admin"
    SELLER = "seller"
    PARTNER = "partner"


@dataclass(frozen=True)
class RequestContext:
    """Encapsulates the caller of a request."""

    user_id: str
    """Authenticated user id."""

    role: Role
    """Role the user acts in."""

    partner_code: str | None = None
    """Assigned partner code, when the user is a partner that has one."""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


async def get_request_context(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_partner_code: str | None = Header(default=None),
) -> RequestContext:
    """Build the request context from identity headers.

    Raises:
        HTTPException 401: Missing user id or unknown role
    """
    if not x_user_id or not x_user_id.strip() or not x_user_role:
        logger.warning("Request without identity headers")
        raise HTTPException(status_code=401, detail="NOT_AUTHORIZED")

    try:
        role = Role(x_user_role.strip().lower())
    except ValueError as e:
        logger.warning(f"Unknown role in request: {x_user_role!r}")
        raise HTTPException(status_code=401, detail="NOT_AUTHORIZED") from e

    partner_code = x_partner_code.strip() if x_partner_code and x_partner_code.strip() else None
    return RequestContext(user_id=x_user_id.strip(), role=role, partner_code=partner_code)


def require_roles(*roles: Role) -> Callable[..., Awaitable[RequestContext]]:
    """Dependency factory allowing only the given roles.

    Raises:
        HTTPException 403: Caller's role is not allowed
    """
    allowed = frozenset(roles)

    async def dependency(
        context: RequestContext = Depends(get_request_context),  # noqa: B008
    ) -> RequestContext:
        if context.role not in allowed:
            logger.warning(f"User {context.user_id} with role {context.role.value} denied")
            raise HTTPException(status_code=403, detail="FORBIDDEN")
        return context

    return dependency


def partner_identifiers(context: RequestContext) -> list[str]:
    """Identifiers under which a partner's receivables may be stored.

    Partner code first (current scheme), then the user id (legacy records).
    """
    identifiers = []
    if context.partner_code:
        identifiers.append(context.partner_code)
    if context.user_id not in identifiers:
        identifiers.append(context.user_id)
    return identifiers


def resolve_partner_id(context: RequestContext, partner_id: str | None) -> str:
    """Resolve which partner identifier a partner-scoped read may use.

    Admins may query any partner but must name one. Partners default to their
    partner code (or user id) and may only name their own identifiers.

    Raises:
        HTTPException 400: Admin did not name a partner
        HTTPException 403: Partner asked for someone else's records
    """
    if context.is_admin:
        if not partner_id or not partner_id.strip():
            raise HTTPException(status_code=400, detail="partner_id required")
        return partner_id.strip()

    own = partner_identifiers(context)
    partner_id = partner_id.strip() if partner_id else None
    if not partner_id:
        return own[0]
    if partner_id not in own:
        logger.warning(f"Partner {context.user_id} attempted to access records of {partner_id}")
        raise HTTPException(status_code=403, detail="FORBIDDEN")
    return partner_id


__all__ = [
    "Role",
    "RequestContext",
    "get_request_context",
    "require_roles",
    "partner_identifiers",
    "resolve_partner_id",
]
