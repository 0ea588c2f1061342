"""Word and character pools the games draw from."""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from buddybe.models.base import Base


class GameWord(Base):
    """A secret word for the impostor game."""
    
    __tablename__ = "game_words"
    
    word: Mapped[str] = mapped_column(String(100))
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    def __repr__(self) -> str:
        return f"<GameWord {self.word}>"


class CrocodileWord(Base):
    """A word to be mimed in crocodile."""
    
    __tablename__ = "crocodile_words"
    
    word: Mapped[str] = mapped_column(String(100))
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    def __repr__(self) -> str:
        return f"<CrocodileWord {self.word}>"


class WhoAmICharacter(Base):
    """A character card for who-am-i."""
    
    __tablename__ = "whoami_characters"
    
    name: Mapped[str] = mapped_column(String(100))
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    def __repr__(self) -> str:
        return f"<WhoAmICharacter {self.name}>"
