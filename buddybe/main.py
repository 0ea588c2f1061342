import logging
import os
from os import getenv
from pathlib import Path

# Load .env before importing modules that read configuration at import time
ENV_FILE_PATHS = [
    Path("/opt/buddybe/.env"),
    Path(__file__).parent.parent / ".env",
]


def load_env_file_fallback() -> bool:
    """Load the first .env file found; variables already set win."""
    # Logging is not configured yet, so this reports with print
    for env_file in ENV_FILE_PATHS:
        if env_file.exists() and env_file.is_file():
            try:
                loaded_count = 0
                with open(env_file, "r") as f:
                    for line in f:
                        line = line.strip()
                        if not line or line.startswith("#") or "=" not in line:
                            continue
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip()
                        if value[:1] == value[-1:] and value[:1] in ("'", '"'):
                            value = value[1:-1]
                        if key and value and key not in os.environ:
                            os.environ[key] = value
                            loaded_count += 1
                if loaded_count > 0:
                    print(f"[BuddyBe] Loaded {loaded_count} environment variables from {env_file}")
                return True
            except OSError as e:
                print(f"[BuddyBe] Warning: Could not load .env file from {env_file}: {e}")
    return False


if not getenv("SUPABASE_URL") or not getenv("SUPABASE_SERVICE_ROLE_KEY"):
    load_env_file_fallback()

from litestar import Litestar, Request
from litestar.config.cors import CORSConfig
from litestar.contrib.sqlalchemy.plugins import (
    AsyncSessionConfig,
    SQLAlchemyAsyncConfig,
    SQLAlchemyInitPlugin,
)
from litestar.exceptions import HTTPException, NotAuthorizedException
from litestar.response import Response
from litestar.status_codes import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from buddybe.api import handle_creation_error
from buddybe.models import Base
from buddybe.routes import ROUTES
from buddybe.sessions import CreationError
from buddybe.utils.logging import log_request_error

DEBUG = getenv("APP_DEBUG", "false").lower() == "true"
# Default DATABASE_URL is for local dev only (Docker Compose)
DATABASE_URL = getenv(
    "DATABASE_URL",
    "postgresql+asyncpg://postgres:postgres@db:5432/buddybe"
)

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("BuddyBe")

logger.info(f"Starting app in {'DEBUG' if DEBUG else 'PRODUCTION'} mode")

if not getenv("SUPABASE_URL") or not getenv("SUPABASE_SERVICE_ROLE_KEY"):
    logger.warning("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set; admin endpoints will fail")
if not getenv("ADMIN_API_KEY"):
    logger.warning("ADMIN_API_KEY not set; admin endpoints will reject every request")

# --- SQLAlchemy config
config = SQLAlchemyAsyncConfig(
    connection_string=DATABASE_URL,
    session_dependency_key="session",
    session_config=AsyncSessionConfig(expire_on_commit=False),
    metadata=Base.metadata,
    create_all=DEBUG,  # Auto-create tables on startup (dev only)
)
plugin = SQLAlchemyInitPlugin(config)

# --- CORS (the mobile client calls from its own origin)
cors_config = CORSConfig(
    allow_origins=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


# --- Exception handlers
def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc, message="Unhandled exception occurred")
    return Response(
        content={"detail": "Internal Server Error"},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json"
    )


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Litestar's own HTTP errors, as JSON with their status code."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    content = {"status_code": exc.status_code, "detail": exc.detail}
    if exc.extra:
        content["extra"] = exc.extra
    return Response(
        content=content,
        status_code=exc.status_code,
        headers=exc.headers,
        media_type="application/json"
    )


def handle_auth_exception(request: Request, exc: NotAuthorizedException) -> Response:
    return Response(
        content={"detail": "Not authorized", "error": exc.detail},
        status_code=HTTP_401_UNAUTHORIZED,
        media_type="application/json"
    )


# --- App init
app = Litestar(
    route_handlers=ROUTES,
    debug=DEBUG,
    plugins=[plugin],
    cors_config=cors_config,
    exception_handlers={
        Exception: log_exceptions,
        HTTPException: handle_http_exception,
        NotAuthorizedException: handle_auth_exception,
        CreationError: handle_creation_error,
    }
)
