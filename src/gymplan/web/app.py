"""FastAPI application for the gymplan API."""

import logging
import random
import traceback
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..clients.ai import AIClient, create_ai_client
from ..config import Settings, configure_logging, load_settings
from ..db.engine import init_db
from ..errors import AppError
from ..services.auth import TokenSigner
from .deps import AppState
from .routers import auth, equipment, gyms, users, workouts

logger = logging.getLogger(__name__)


def _error_body(status: str, message: str, exc: Exception, settings: Settings) -> dict:
    body = {"status": status, "message": message}
    if settings.is_development:
        body["stack"] = "".join(traceback.format_exception(exc))
    return body


def create_app(
    settings: Settings | None = None,
    ai_client: AIClient | None = None,
    rng_factory: Callable[[], random.Random] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    `ai_client` and `rng_factory` replace the configured OpenAI client
    and the unseeded RNG; tests use them to inject fakes.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    state = AppState(
        settings=settings,
        signer=TokenSigner(settings.secret_key, settings.token_ttl),
        ai_client=ai_client,
        rng_factory=rng_factory or random.Random,
    )
    owns_client = ai_client is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database and the AI client; close the client on shutdown."""
        db_path = settings.db_path
        if not db_path.exists():
            db_path.parent.mkdir(parents=True, exist_ok=True)
            await init_db(db_path)
        if owns_client:
            state.ai_client = create_ai_client(
                settings.openai_api_key, settings.ai_model, settings.ai_timeout
            )
        app.state.gymplan = state
        yield
        if owns_client and state.ai_client is not None:
            await state.ai_client.close()

    app = FastAPI(
        title="gymplan",
        description="Equipment-aware workout plan API",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message,
                exc_info=exc,
            )
        else:
            logger.warning(
                "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status, exc.message, exc, settings),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"] if part != "body")
            messages.append(f"{location}: {error['msg']}" if location else error["msg"])
        message = "Invalid input data. " + "; ".join(messages)
        logger.warning("%s %s -> 400 %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=400, content=_error_body("fail", message, exc, settings)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Can't find {request.url.path} on this server!"
        else:
            message = str(exc.detail)
        status = "fail" if 400 <= exc.status_code < 500 else "error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": status, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "%s %s -> 500 unhandled %s", request.method, request.url.path,
            type(exc).__name__, exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("error", "Something went wrong", exc, settings),
        )

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(equipment.router)
    app.include_router(gyms.router)
    app.include_router(workouts.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
