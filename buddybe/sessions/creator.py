"""Game session creation.

Every "create game" flow runs the same protocol: validate the player count,
compose the game-specific fields, generate a join code, write one session
record and hand the code back so the client can open ``/games/<type>/<code>``.
The variants below only differ in their player bounds and in what they
compose.
"""

import abc
import enum
import logging
import random
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from buddybe.sessions.codes import generate_join_code
from buddybe.sessions.errors import (
    CreationError,
    CreationInProgress,
    EmptyWordPool,
    InvalidPlayerCount,
    PersistenceError,
)
from buddybe.sessions.store import SessionStore, WordPool

logger = logging.getLogger("BuddyBe.sessions")

WAITING = "waiting"

# Battleship boards are always 8 columns wide
GRID_WIDTH = 8

SLOT_SYMBOLS = ["🍒", "🍋", "🍊", "🍇", "⭐", "💎", "7️⃣", "🎰"]
COMBINATION_LENGTH = 3

Notifier = Callable[[str], None]
Composed = Tuple[Dict[str, Any], List[Dict[str, Any]]]

# Plain ASCII integers only: no separators, no non-ASCII digits
PLAYER_COUNT_PATTERN = re.compile(r"[+-]?[0-9]+")


class CreationState(str, enum.Enum):
    """Where a creator is in its current attempt."""
    IDLE = "idle"
    VALIDATING = "validating"
    COMPOSING = "composing"
    PERSISTING = "persisting"


def session_path(game_type: str, code: str) -> str:
    """Canonical client path of a session."""
    return f"/games/{game_type}/{code}"


@dataclass
class CreatedSession:
    """A session that was written to the store."""
    game_type: str
    code: str
    fields: Dict[str, Any]
    seats: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def path(self) -> str:
        return session_path(self.game_type, self.code)


def parse_player_count(raw_value: Any, game_type: str, min_players: int, max_players: int) -> int:
    """Parse a human-entered player count and check it against the bounds."""
    if isinstance(raw_value, bool):
        raise InvalidPlayerCount(raw_value, game_type, min_players, max_players)
    text = str(raw_value).strip()
    if not PLAYER_COUNT_PATTERN.fullmatch(text):
        raise InvalidPlayerCount(raw_value, game_type, min_players, max_players)
    count = int(text)
    if count < min_players or count > max_players:
        raise InvalidPlayerCount(raw_value, game_type, min_players, max_players)
    return count


def derive_grid_height(player_count: int) -> int:
    """Board height for a battleship game: 2 players 8x8, 3 players 8x11, ..."""
    return 8 + (player_count - 2) * 3


class SessionCreator(abc.ABC):
    """Base class for the per-game creators.

    Subclasses set ``game_type`` and the player bounds, and implement
    :meth:`compose`. The store, word pool, random source and notification
    sink are all injected so tests can substitute them.
    """

    game_type: str = ""
    min_players: int = 2
    max_players: int = 20
    uses_word_pool: bool = False

    def __init__(
        self,
        store: SessionStore,
        word_pool: Optional[WordPool] = None,
        rng: Optional[random.Random] = None,
        notify: Optional[Notifier] = None,
    ):
        if self.uses_word_pool and word_pool is None:
            raise ValueError(f"{type(self).__name__} requires a word pool")
        self.store = store
        self.word_pool = word_pool
        self.rng = rng or random.SystemRandom()
        self.notify = notify
        self.state = CreationState.IDLE

    async def create_session(self, raw_player_count: Any) -> CreatedSession:
        """Run one creation attempt.

        Raises a :class:`CreationError` subclass on failure, after reporting
        its message key to the notification sink. Nothing is retried; calling
        again starts over with fresh random values.
        """
        if self.state is not CreationState.IDLE:
            raise CreationInProgress(f"A {self.game_type} game is already being created")

        try:
            self.state = CreationState.VALIDATING
            player_count = parse_player_count(
                raw_player_count, self.game_type, self.min_players, self.max_players
            )

            self.state = CreationState.COMPOSING
            extra_fields, seats = await self.compose(player_count)
            code = generate_join_code(self.rng)
            fields = {
                "code": code,
                "player_count": player_count,
                **extra_fields,
                "status": WAITING,
            }

            self.state = CreationState.PERSISTING
            await self._persist(fields, seats)
        except CreationError as exc:
            logger.warning(f"Could not create {self.game_type} game: {exc}")
            self._report(exc)
            raise
        finally:
            self.state = CreationState.IDLE

        logger.info(f"Created {self.game_type} game {code} for {player_count} players")
        return CreatedSession(game_type=self.game_type, code=code, fields=fields, seats=seats)

    @abc.abstractmethod
    async def compose(self, player_count: int) -> Composed:
        """Return the variant fields and seat rows for ``player_count`` players."""

    async def load_word_pool(self) -> List[Any]:
        """Fetch every identifier in the word pool; an empty pool is an error."""
        try:
            words = list(await self.word_pool.list_words())
        except Exception as exc:
            raise EmptyWordPool(f"Word pool lookup failed for {self.game_type}: {exc}") from exc
        if not words:
            raise EmptyWordPool(f"Word pool for {self.game_type} is empty")
        return words

    async def _persist(self, fields: Dict[str, Any], seats: List[Dict[str, Any]]) -> None:
        try:
            await self.store.insert_session(self.game_type, fields, seats or None)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Could not save {self.game_type} game {fields['code']}: {exc}") from exc

    def _report(self, exc: CreationError) -> None:
        if self.notify is not None:
            self.notify(exc.message_key)


class ImpostorCreator(SessionCreator):
    """Everyone but one seat sees the secret word."""

    game_type = "impostor"
    min_players = 3
    max_players = 20
    uses_word_pool = True

    async def compose(self, player_count: int) -> Composed:
        words = await self.load_word_pool()
        return {
            "word_id": self.rng.choice(words),
            "impostor_index": self.rng.randrange(player_count),
        }, []


class BattleshipCreator(SessionCreator):
    game_type = "battleship"
    min_players = 2
    max_players = 10

    async def compose(self, player_count: int) -> Composed:
        return {"grid_size": derive_grid_height(player_count)}, []


class CrocodileCreator(SessionCreator):
    """Charades: seat 0 shows the first word, seat 1 guesses first."""

    game_type = "crocodile"
    min_players = 2
    max_players = 20
    uses_word_pool = True

    async def compose(self, player_count: int) -> Composed:
        words = await self.load_word_pool()
        fields = {
            "current_word_id": self.rng.choice(words),
            "current_player": 0,
            "showing_player": 0,
            "current_guesser": 1,
            "round": 1,
        }
        seats = [{"player_index": i} for i in range(player_count)]
        return fields, seats


class WhoAmICreator(SessionCreator):
    """Each seat gets a character; characters repeat when the pool is small."""

    game_type = "whoami"
    min_players = 2
    max_players = 20
    uses_word_pool = True

    async def compose(self, player_count: int) -> Composed:
        characters = await self.load_word_pool()
        self.rng.shuffle(characters)
        fields = {"guesser_index": self.rng.randrange(player_count)}
        seats = [
            {
                "player_index": i,
                "character_id": characters[i % len(characters)],
                "guessed": False,
            }
            for i in range(player_count)
        ]
        return fields, seats


class CasinoCreator(SessionCreator):
    """Seats hold slot symbols; the secret combination is drawn from them."""

    game_type = "casino"
    min_players = 3
    max_players = 20

    async def compose(self, player_count: int) -> Composed:
        symbols = list(SLOT_SYMBOLS)
        self.rng.shuffle(symbols)
        seat_symbols = [symbols[i % len(symbols)] for i in range(player_count)]
        combination = [self.rng.choice(seat_symbols) for _ in range(COMBINATION_LENGTH)]
        fields = {
            "current_combination": combination,
            "guesser_index": 0,
            "current_round": 1,
            "guesses_in_round": 0,
        }
        seats = [
            {"player_index": i, "symbol": symbol}
            for i, symbol in enumerate(seat_symbols)
        ]
        return fields, seats


CREATORS: Dict[str, Type[SessionCreator]] = {
    creator.game_type: creator
    for creator in (
        ImpostorCreator,
        BattleshipCreator,
        CrocodileCreator,
        WhoAmICreator,
        CasinoCreator,
    )
}
