"""Battleship game model."""

from typing import Optional

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin


class BattleshipGame(SessionMixin, Base):
    """A shared board, 8 columns wide, that grows with the player count."""
    
    __tablename__ = "battleship_games"
    
    # Board height; the width is always 8
    grid_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    
    current_player_index: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
