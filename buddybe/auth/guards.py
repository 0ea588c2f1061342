"""Admin API authentication."""

import logging
import secrets
from os import getenv

from litestar.connection import ASGIConnection
from litestar.exceptions import NotAuthorizedException
from litestar.handlers.base import BaseRouteHandler

logger = logging.getLogger("BuddyBe.auth")

ADMIN_API_KEY = getenv("ADMIN_API_KEY")


def _bearer_token(connection: ASGIConnection) -> str:
    header = connection.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


async def require_admin_key_guard(connection: ASGIConnection, handler: BaseRouteHandler) -> None:
    """Guard requiring ``Authorization: Bearer <ADMIN_API_KEY>``."""
    path = connection.url.path
    if not ADMIN_API_KEY:
        logger.error(f"Admin access attempted but ADMIN_API_KEY is not configured: {path}")
        raise NotAuthorizedException("Admin API not configured")

    token = _bearer_token(connection)
    if not token:
        logger.warning(f"Admin access attempted without bearer token: {path}")
        raise NotAuthorizedException("Not authenticated")

    if not secrets.compare_digest(token, ADMIN_API_KEY):
        logger.warning(f"Admin access attempted with invalid token: {path}")
        raise NotAuthorizedException("Unauthorized")
