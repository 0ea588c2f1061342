"""Impostor game model."""

import uuid
from typing import Optional

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin


class ImpostorGame(SessionMixin, Base):
    """Every seat sees the word except the impostor's."""
    
    __tablename__ = "games"
    
    word_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("game_words.id", ondelete="SET NULL"),
        nullable=True,
    )
    
    # Seat index in [0, player_count)
    impostor_index: Mapped[int] = mapped_column(Integer)
    
    # Gameplay bookkeeping, filled in once the game starts
    starting_player: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    views_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
