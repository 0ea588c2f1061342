"""Columns shared by every game session table."""

import enum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class SessionStatus(str, enum.Enum):
    """Game session status. Only WAITING is set by this service."""
    WAITING = "waiting"       # Created, players are joining
    PLAYING = "playing"       # Gameplay has started
    FINISHED = "finished"     # Game is over


class SessionMixin:
    """Join code, player count and status of a game session."""
    
    # Join code for players to connect (e.g., "K7MX2Q")
    code: Mapped[str] = mapped_column(
        String(10),
        unique=True,
        index=True,
    )
    
    player_count: Mapped[int] = mapped_column(Integer)
    
    # Stored as plain text; gameplay services may write their own states
    status: Mapped[str] = mapped_column(
        String(20),
        default=SessionStatus.WAITING.value,
    )
    
    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code} ({self.player_count} players) - {self.status}>"
