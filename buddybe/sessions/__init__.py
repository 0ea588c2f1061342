"""Game session creation."""

from buddybe.sessions.codes import JOIN_CODE_ALPHABET, JOIN_CODE_LENGTH, generate_join_code
from buddybe.sessions.creator import (
    CREATORS,
    GRID_WIDTH,
    BattleshipCreator,
    CasinoCreator,
    CreatedSession,
    CreationState,
    CrocodileCreator,
    ImpostorCreator,
    SessionCreator,
    WhoAmICreator,
    derive_grid_height,
    parse_player_count,
    session_path,
)
from buddybe.sessions.errors import (
    CreationError,
    CreationInProgress,
    EmptyWordPool,
    InvalidPlayerCount,
    PersistenceError,
)
from buddybe.sessions.store import SessionStore, WordPool

__all__ = [
    "JOIN_CODE_ALPHABET",
    "JOIN_CODE_LENGTH",
    "generate_join_code",
    "CREATORS",
    "GRID_WIDTH",
    "SessionCreator",
    "ImpostorCreator",
    "BattleshipCreator",
    "CrocodileCreator",
    "WhoAmICreator",
    "CasinoCreator",
    "CreatedSession",
    "CreationState",
    "derive_grid_height",
    "parse_player_count",
    "session_path",
    "CreationError",
    "CreationInProgress",
    "EmptyWordPool",
    "InvalidPlayerCount",
    "PersistenceError",
    "SessionStore",
    "WordPool",
]
