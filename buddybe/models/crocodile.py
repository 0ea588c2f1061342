"""Crocodile (charades) game models."""

import uuid
from typing import List, Optional

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin


class CrocodileGame(SessionMixin, Base):
    """One seat mimes the current word while another guesses."""
    
    __tablename__ = "crocodile_games"
    
    current_word_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("crocodile_words.id", ondelete="SET NULL"),
        nullable=True,
    )
    
    # Turn tracking (seat indexes)
    current_player: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    showing_player: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    current_guesser: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=1)
    round: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=1)
    
    players: Mapped[List["CrocodilePlayer"]] = relationship(
        "CrocodilePlayer",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="CrocodilePlayer.player_index",
    )


class CrocodilePlayer(Base):
    """A seat in a crocodile game."""
    
    __tablename__ = "crocodile_players"
    
    game_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("crocodile_games.id", ondelete="CASCADE"),
        index=True,
    )
    player_index: Mapped[int] = mapped_column(Integer)
    
    game: Mapped["CrocodileGame"] = relationship("CrocodileGame", back_populates="players")
    
    def __repr__(self) -> str:
        return f"<CrocodilePlayer {self.player_index} in game {self.game_id}>"
