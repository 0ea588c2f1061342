from buddybe.games.routes import routes as routes_games
from buddybe.api import GamesController, AuthAdminController

ROUTES = [
    *routes_games,
    GamesController,
    AuthAdminController,
]
