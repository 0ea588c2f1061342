"""Who-am-I game models."""

import uuid
from typing import List, Optional

from sqlalchemy import Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin


class WhoAmIGame(SessionMixin, Base):
    """Every seat wears a character card; one seat guesses at a time."""
    
    __tablename__ = "whoami_games"
    
    guesser_index: Mapped[int] = mapped_column(Integer)
    
    players: Mapped[List["WhoAmIPlayer"]] = relationship(
        "WhoAmIPlayer",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="WhoAmIPlayer.player_index",
    )


class WhoAmIPlayer(Base):
    """A seat and the character assigned to it."""
    
    __tablename__ = "whoami_players"
    
    game_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("whoami_games.id", ondelete="CASCADE"),
        index=True,
    )
    player_index: Mapped[int] = mapped_column(Integer)
    character_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("whoami_characters.id", ondelete="SET NULL"),
        nullable=True,
    )
    guessed: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True, default=False)
    
    game: Mapped["WhoAmIGame"] = relationship("WhoAmIGame", back_populates="players")
    
    def __repr__(self) -> str:
        return f"<WhoAmIPlayer {self.player_index} in game {self.game_id}>"
