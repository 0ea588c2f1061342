"""SQLAlchemy implementations of the session store and word pools."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from buddybe.models import (
    Base,
    GameWord, CrocodileWord, WhoAmICharacter,
    ImpostorGame,
    BattleshipGame,
    CrocodileGame, CrocodilePlayer,
    WhoAmIGame, WhoAmIPlayer,
    CasinoGame, CasinoPlayer,
)
from buddybe.sessions.errors import PersistenceError
from buddybe.utils.logging import error_log

logger = logging.getLogger("BuddyBe.sessions.sql")

# game type -> (session model, seat model)
SESSION_TABLES: Dict[str, Tuple[Type[Base], Optional[Type[Base]]]] = {
    "impostor": (ImpostorGame, None),
    "battleship": (BattleshipGame, None),
    "crocodile": (CrocodileGame, CrocodilePlayer),
    "whoami": (WhoAmIGame, WhoAmIPlayer),
    "casino": (CasinoGame, CasinoPlayer),
}

WORD_POOLS: Dict[str, Type[Base]] = {
    "impostor": GameWord,
    "crocodile": CrocodileWord,
    "whoami": WhoAmICharacter,
}


def _tables_for(game_type: str) -> Tuple[Type[Base], Optional[Type[Base]]]:
    try:
        return SESSION_TABLES[game_type]
    except KeyError:
        raise ValueError(f"Unknown game type '{game_type}'") from None


class SqlSessionStore:
    """Session store backed by the request's AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert_session(
        self,
        game_type: str,
        fields: Dict[str, Any],
        seats: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        game_model, seat_model = _tables_for(game_type)
        game = game_model(**fields)
        if seats:
            if seat_model is None:
                raise ValueError(f"{game_type} games have no seat rows")
            game.players = [seat_model(**seat) for seat in seats]

        try:
            self.session.add(game)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            error_log(
                "Failed to insert game session",
                exc=e,
                context={
                    "game_type": game_type,
                    "code": fields.get("code"),
                    "player_count": fields.get("player_count"),
                },
            )
            raise PersistenceError(f"Could not save {game_type} game {fields.get('code')}") from e

        logger.debug(f"Inserted {game_type} game {fields.get('code')} with {len(seats or [])} seats")

    async def fetch_session(self, game_type: str, code: str) -> Optional[Dict[str, Any]]:
        game_model, seat_model = _tables_for(game_type)
        stmt = select(game_model).where(game_model.code == code.upper())
        if seat_model is not None:
            stmt = stmt.options(selectinload(game_model.players))

        result = await self.session.execute(stmt)
        game = result.scalar_one_or_none()
        if game is None:
            return None

        record = game.as_dict()
        if seat_model is not None:
            record["players"] = [player.as_dict() for player in game.players]
        return record


class SqlWordPool:
    """Reads the identifiers of one pool table."""

    def __init__(self, session: AsyncSession, model: Type[Base]):
        self.session = session
        self.model = model

    async def list_words(self) -> Sequence[Any]:
        result = await self.session.execute(select(self.model.id))
        return result.scalars().all()


def word_pool_for(game_type: str, session: AsyncSession) -> Optional[SqlWordPool]:
    """The pool a game type draws from, or None if it needs none."""
    model = WORD_POOLS.get(game_type)
    if model is None:
        return None
    return SqlWordPool(session, model)
