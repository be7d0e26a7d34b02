"""Translate story library errors into JSON HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storyshelf.domain.errors import StoryShelfError
from storyshelf.domain.story import MISSING_FIELDS_MESSAGE

logger = logging.getLogger(__name__)


async def story_error_handler(request: Request, exc: StoryShelfError) -> JSONResponse:
    """Map the error taxonomy onto 400/404/500."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and path params are client errors, not 422s."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    message = MISSING_FIELDS_MESSAGE
    if any(err.get("loc", ())[:1] == ("path",) for err in exc.errors()):
        message = "Invalid story id"
    return JSONResponse({"error": message}, status_code=400)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything not in the taxonomy is a 500 carrying the failure's message."""
    logger.error(f"{request.method} {request.url.path} crashed: {exc!r}", exc_info=exc)
    return JSONResponse({"error": str(exc) or type(exc).__name__}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Install the story error handlers on an application."""
    app.add_exception_handler(StoryShelfError, story_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
