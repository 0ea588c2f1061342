"""Admin API endpoints for account management."""

import logging
import re
from typing import Any, Dict, List, Optional

from litestar import Controller, post
from litestar.exceptions import HTTPException, NotFoundException, ValidationException
from litestar.status_codes import HTTP_200_OK, HTTP_500_INTERNAL_SERVER_ERROR
from pydantic import BaseModel, ConfigDict, Field

from buddybe.auth.admin_client import AuthAdminClient, AuthAdminError
from buddybe.auth.guards import require_admin_key_guard

logger = logging.getLogger("BuddyBe.admin")

# Phone-only accounts are registered under a synthetic email address
PHONE_EMAIL_DOMAIN = "phone.buddybe.app"
MIN_PASSWORD_LENGTH = 6


# --- Request/Response Schemas ---

class ResetPasswordRequest(BaseModel):
    """Request to reset the password of a phone account."""
    model_config = ConfigDict(populate_by_name=True)

    phone: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")


class ResetPasswordResponse(BaseModel):
    success: bool
    message: str


class DeleteAllUsersResponse(BaseModel):
    """Outcome of a bulk deletion, serialized with the client's camelCase keys."""
    success: bool
    deleted: int
    deleted_users: List[str] = Field(serialization_alias="deletedUsers")
    errors: List[str]


# --- Helper Functions ---

def normalize_phone(phone: str) -> str:
    """Strip whitespace and make sure the number starts with '+'."""
    compact = re.sub(r"\s", "", phone)
    return compact if compact.startswith("+") else f"+{compact}"


def phone_email(normalized_phone: str) -> str:
    """Synthetic email of a phone account."""
    return f"{normalized_phone.lstrip('+')}@{PHONE_EMAIL_DOMAIN}"


def get_admin_client() -> AuthAdminClient:
    return AuthAdminClient()


# --- Controller ---

class AuthAdminController(Controller):
    """Privileged account operations proxied to the auth platform."""

    path = "/api/admin"
    tags = ["admin"]
    guards = [require_admin_key_guard]

    @post("/delete-all-users", status_code=HTTP_200_OK)
    async def delete_all_users(self) -> Dict[str, Any]:
        """Delete every auth user. Per-user failures are collected, not fatal."""
        deleted_users: List[str] = []
        errors: List[str] = []

        try:
            async with get_admin_client() as admin:
                users = await admin.list_users()
                logger.info(f"Deleting {len(users)} auth users")

                for user in users:
                    try:
                        await admin.delete_user(user.id)
                    except AuthAdminError as e:
                        errors.append(f"Failed to delete {user.label}: {e}")
                    else:
                        deleted_users.append(user.label)
        except AuthAdminError as e:
            logger.error(f"Bulk user deletion aborted: {e}")
            raise HTTPException(detail=str(e), status_code=HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Deleted {len(deleted_users)} auth users ({len(errors)} failures)")
        return DeleteAllUsersResponse(
            success=True,
            deleted=len(deleted_users),
            deleted_users=deleted_users,
            errors=errors,
        ).model_dump(by_alias=True)

    @post("/reset-password", status_code=HTTP_200_OK)
    async def reset_password(self, data: ResetPasswordRequest) -> ResetPasswordResponse:
        """Set a new password on the account registered with a phone number."""
        if not data.phone or not data.new_password:
            logger.warning("Password reset requested without phone or new password")
            raise ValidationException("Phone and new password are required")

        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        normalized_phone = normalize_phone(data.phone)
        fake_email = phone_email(normalized_phone)
        logger.info(f"Resetting password for: {normalized_phone}")

        async with get_admin_client() as admin:
            try:
                users = await admin.list_users()
            except AuthAdminError as e:
                logger.error(f"Error listing users: {e}")
                raise HTTPException(detail="Failed to find user", status_code=HTTP_500_INTERNAL_SERVER_ERROR)

            user = next(
                (u for u in users if u.phone == normalized_phone or u.email == fake_email),
                None,
            )
            if user is None:
                logger.info("User not found")
                raise NotFoundException("User not found")

            try:
                await admin.update_password(user.id, data.new_password)
            except AuthAdminError as e:
                logger.error(f"Error updating password: {e}")
                raise HTTPException(detail="Failed to update password", status_code=HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Password reset successful for user: {user.id}")
        return ResetPasswordResponse(success=True, message="Password reset successfully")
