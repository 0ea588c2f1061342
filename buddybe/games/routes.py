"""Form-based game creation: post the player count, get redirected to the game."""

import logging
from dataclasses import dataclass
from typing import Annotated
from urllib.parse import urlencode

from litestar import post
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.response import Redirect
from litestar.status_codes import HTTP_303_SEE_OTHER
from sqlalchemy.ext.asyncio import AsyncSession

from buddybe.api.games import build_creator
from buddybe.sessions import CreationError

logger = logging.getLogger("BuddyBe.games")


@dataclass
class CreateGameForm:
    player_count: str = ""


@post("/games/{game_type:str}")
async def create_game_form(
    game_type: str,
    data: Annotated[CreateGameForm, Body(media_type=RequestEncodingType.URL_ENCODED)],
    session: AsyncSession,
) -> Redirect:
    """Create a game and redirect to it, or back to the form with an error key."""
    creator = build_creator(game_type, session)
    try:
        created = await creator.create_session(data.player_count)
    except CreationError as exc:
        logger.info(f"Form creation of {game_type} game failed: {exc.message_key}")
        query = urlencode({"error": exc.message_key})
        return Redirect(f"/games/{game_type}?{query}", status_code=HTTP_303_SEE_OTHER)
    return Redirect(created.path, status_code=HTTP_303_SEE_OTHER)


routes = [create_game_form]
