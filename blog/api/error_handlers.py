"""Exception handlers for errors raised below the endpoint layer."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blog.core.errors import RecordInvalid

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register global error handlers on the FastAPI app."""

    @app.exception_handler(RecordInvalid)
    async def record_invalid_handler(request: Request, exc: RecordInvalid):
        logger.warning(f"Record invalid on {request.url.path}: {exc.errors}")
        return JSONResponse(
            status_code=422,
            content=exc.to_response(),
        )
