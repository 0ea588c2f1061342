"""Game session API endpoints."""

import logging
from typing import Any, Dict, List, Union

from litestar import Controller, Request, Response, get, post
from litestar.exceptions import NotFoundException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from buddybe.sessions import (
    CREATORS,
    CreationError,
    CreationInProgress,
    EmptyWordPool,
    InvalidPlayerCount,
    PersistenceError,
    SessionCreator,
)
from buddybe.sessions.codes import is_join_code
from buddybe.sessions.sql import SqlSessionStore, word_pool_for

logger = logging.getLogger("BuddyBe.games")


# --- Request/Response Schemas ---

class CreateGameRequest(BaseModel):
    """Request to create a new game session."""
    # Kept raw: the creator parses and range-checks it
    player_count: Union[int, str] = Field(description="Number of players, as entered")


class CreateGameResponse(BaseModel):
    """The join code and the path the client should open."""
    code: str
    game_type: str
    path: str


class GameTypeResponse(BaseModel):
    """A game that can be created."""
    id: str
    min_players: int
    max_players: int
    path: str


# --- Helper Functions ---

def build_creator(game_type: str, session: AsyncSession) -> SessionCreator:
    """Creator for ``game_type`` wired to the request's database session."""
    creator_cls = CREATORS.get(game_type)
    if creator_cls is None:
        raise NotFoundException(f"Unknown game '{game_type}'")
    return creator_cls(
        store=SqlSessionStore(session),
        word_pool=word_pool_for(game_type, session),
    )


CREATION_ERROR_STATUS = {
    InvalidPlayerCount: HTTP_400_BAD_REQUEST,
    CreationInProgress: HTTP_409_CONFLICT,
    EmptyWordPool: HTTP_503_SERVICE_UNAVAILABLE,
    PersistenceError: HTTP_500_INTERNAL_SERVER_ERROR,
}


def handle_creation_error(request: Request, exc: CreationError) -> Response:
    """Report a failed creation attempt with its message key."""
    status_code = CREATION_ERROR_STATUS.get(type(exc), HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(
        content={"detail": exc.user_message, "message_key": exc.message_key},
        status_code=status_code,
        media_type="application/json",
    )


# --- Controller ---

class GamesController(Controller):
    """API endpoints for game sessions."""

    path = "/api/games"
    tags = ["games"]

    @get("/")
    async def list_games(self) -> List[GameTypeResponse]:
        """Games that can be created, with their player ranges."""
        return [
            GameTypeResponse(
                id=game_type,
                min_players=creator.min_players,
                max_players=creator.max_players,
                path=f"/games/{game_type}",
            )
            for game_type, creator in CREATORS.items()
        ]

    @post("/{game_type:str}")
    async def create_game(
        self,
        game_type: str,
        data: CreateGameRequest,
        session: AsyncSession,
    ) -> CreateGameResponse:
        """Create a game session and return its join code."""
        creator = build_creator(game_type, session)
        logger.debug(f"Creating {game_type} game for player count {data.player_count!r}")
        created = await creator.create_session(data.player_count)
        return CreateGameResponse(code=created.code, game_type=game_type, path=created.path)

    @get("/{game_type:str}/{code:str}")
    async def get_game(
        self,
        game_type: str,
        code: str,
        session: AsyncSession,
    ) -> Dict[str, Any]:
        """Get a game session by join code."""
        if game_type not in CREATORS:
            raise NotFoundException(f"Unknown game '{game_type}'")
        record = None
        if is_join_code(code.upper()):
            record = await SqlSessionStore(session).fetch_session(game_type, code)
        if record is None:
            raise NotFoundException(f"Game with code '{code}' not found")
        return record
