from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from .api.api import api_router
from .api.error_handlers import register_error_handlers
from .core.config import LOG_LEVEL
from .db.database import create_tables
from fastapi.responses import Response
import logging
import json
import traceback

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # make sure tables are created
    create_tables()
    yield

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("fastapi")

app = FastAPI(title="Blog", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    body = await request.body()
    request_info = {
        "url": str(request.url),
        "method": request.method,
        "body": body.decode(errors="replace") if body else None,
        "path_params": request.path_params,
        "query_params": dict(request.query_params)
    }

    try:
        response = await call_next(request)

        if response.status_code >= 400:
            response_body = b""
            async for chunk in response.body_iterator:
                response_body += chunk

            logger.error(
                f"Request failed with status {response.status_code}\n"
                f"Request: {json.dumps(request_info, indent=2)}\n"
                f"Response: {response_body.decode(errors='replace')}\n"
            )
            # body is replayed as-is; error bodies are not always JSON
            return Response(
                content=response_body,
                status_code=response.status_code,
                headers={
                    key: value for key, value in response.headers.items()
                    if key.lower() != "content-length"
                }
            )

        return response

    except Exception as e:
        logger.error(
            f"Request failed with exception\n"
            f"Request: {json.dumps(request_info, indent=2)}\n"
            f"Error: {str(e)}\n"
            f"Traceback: {traceback.format_exc()}"
        )
        raise

register_error_handlers(app)

# register the API router
app.include_router(api_router, prefix="/api")
