"""BuddyBe API routes."""

from buddybe.api.games import GamesController, handle_creation_error
from buddybe.api.admin import AuthAdminController

__all__ = ["GamesController", "AuthAdminController", "handle_creation_error"]
