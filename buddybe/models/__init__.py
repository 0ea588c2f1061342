"""BuddyBe database models."""

from buddybe.models.base import Base
from buddybe.models.session import SessionMixin, SessionStatus
from buddybe.models.words import GameWord, CrocodileWord, WhoAmICharacter
from buddybe.models.impostor import ImpostorGame
from buddybe.models.battleship import BattleshipGame
from buddybe.models.crocodile import CrocodileGame, CrocodilePlayer
from buddybe.models.whoami import WhoAmIGame, WhoAmIPlayer
from buddybe.models.casino import CasinoGame, CasinoPlayer

__all__ = [
    "Base",
    "SessionMixin",
    "SessionStatus",
    "GameWord",
    "CrocodileWord",
    "WhoAmICharacter",
    "ImpostorGame",
    "BattleshipGame",
    "CrocodileGame",
    "CrocodilePlayer",
    "WhoAmIGame",
    "WhoAmIPlayer",
    "CasinoGame",
    "CasinoPlayer",
]
