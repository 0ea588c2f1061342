"""Errors raised while creating a game session."""

from typing import Optional


# English fallbacks for the message keys; the client translates the key itself
MESSAGES = {
    "games.create_error": "Could not create the game. Please try again.",
    "games.error": "Could not load the game content.",
    "games.creating": "The game is already being created.",
    "games.players_range": "Enter a number of players between {min} and {max}.",
}


class CreationError(Exception):
    """Base class for session creation failures.

    ``message_key`` is the localization key reported to the user.
    """

    message_key = "games.create_error"

    def __init__(self, message: str, message_key: Optional[str] = None):
        super().__init__(message)
        if message_key:
            self.message_key = message_key

    @property
    def user_message(self) -> str:
        return MESSAGES.get(self.message_key, MESSAGES["games.create_error"])


class InvalidPlayerCount(CreationError):
    """Player count is not an integer or falls outside the game's bounds."""

    def __init__(self, raw_value: object, game_type: str, min_players: int, max_players: int):
        super().__init__(
            f"Invalid player count {raw_value!r} for {game_type} "
            f"(expected {min_players}-{max_players})",
            message_key=f"games.{game_type}.players_range",
        )
        self.raw_value = raw_value
        self.min_players = min_players
        self.max_players = max_players

    @property
    def user_message(self) -> str:
        return MESSAGES["games.players_range"].format(min=self.min_players, max=self.max_players)


class EmptyWordPool(CreationError):
    """The word pool lookup failed or returned nothing."""

    message_key = "games.error"


class PersistenceError(CreationError):
    """The session record could not be written."""

    message_key = "games.create_error"


class CreationInProgress(CreationError):
    """A creation attempt is already outstanding on this creator."""

    message_key = "games.creating"
