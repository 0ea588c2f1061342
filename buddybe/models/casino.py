"""Casino game models."""

import uuid
from typing import List, Optional

from sqlalchemy import Integer, String, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin


class CasinoGame(SessionMixin, Base):
    """Players guess a secret combination of slot symbols."""
    
    __tablename__ = "casino_games"
    
    # Three symbols, each held by some seat
    current_combination: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    
    guesser_index: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    current_round: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=1)
    guesses_in_round: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)
    
    players: Mapped[List["CasinoPlayer"]] = relationship(
        "CasinoPlayer",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="CasinoPlayer.player_index",
    )


class CasinoPlayer(Base):
    """A seat and its slot symbol."""
    
    __tablename__ = "casino_players"
    
    game_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("casino_games.id", ondelete="CASCADE"),
        index=True,
    )
    player_index: Mapped[int] = mapped_column(Integer)
    symbol: Mapped[str] = mapped_column(String(20))
    
    game: Mapped["CasinoGame"] = relationship("CasinoGame", back_populates="players")
    
    def __repr__(self) -> str:
        return f"<CasinoPlayer {self.player_index} ({self.symbol}) in game {self.game_id}>"
