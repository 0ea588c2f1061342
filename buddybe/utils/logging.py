"""Error logging helpers that attach context to the message."""

import logging
import traceback
from os import getenv
from typing import Any, Optional

# Full tracebacks go into the message only in debug mode
DEBUG = getenv("APP_DEBUG", "false").lower() == "true"

logger = logging.getLogger("BuddyBe")


def error_log(
    message: str,
    exc: Optional[BaseException] = None,
    context: Optional[dict] = None,
    **kwargs
) -> None:
    """
    Log an error as ``message | Context: k=v, ... | Exception: Type: text``.

    Args:
        message: What failed
        exc: The exception, if any; passed on as exc_info
        context: Values that identify the failing operation (game type, code, path, ...)
        **kwargs: Passed through to the logger
    """
    parts = [message]

    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))

    if exc is not None:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if DEBUG:
            parts.append("Traceback:\n" + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))

    logger.error(" | ".join(parts), exc_info=exc, **kwargs)


def log_request_error(
    request: Any,
    exc: BaseException,
    message: Optional[str] = None
) -> None:
    """
    Log an exception raised while handling a request.

    Args:
        request: Litestar request (method, url and path params are read if present)
        exc: The exception
        message: Optional custom message
    """
    context = {}

    url = getattr(request, "url", None)
    if url is not None:
        context["path"] = getattr(url, "path", url)
    if hasattr(request, "method"):
        context["method"] = request.method
    # Read from the scope: routing may not have run yet
    path_params = (getattr(request, "scope", None) or {}).get("path_params")
    if path_params:
        context.update(path_params)

    error_log(message or f"Unhandled exception: {type(exc).__name__}", exc=exc, context=context)
