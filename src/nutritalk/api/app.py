"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutritalk.api.accounts import router as accounts_router
from nutritalk.api.assistant import router as assistant_router
from nutritalk.api.tracker import router as tracker_router
from nutritalk.app_logging import configure_logging
from nutritalk.config import parse_cors_origins
from nutritalk.containers import AppContainer
from nutritalk.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NutritalkError,
    ProfileNotFoundError,
)

_ERROR_STATUS: dict[type[NutritalkError], int] = {
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="NutriTalk", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NutritalkError)
    async def handle_domain_error(
        request: Request, exc: NutritalkError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info(
            "Rejected %s %s: %s", request.method, request.url.path, exc.message
        )
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    app.include_router(accounts_router)
    app.include_router(tracker_router)
    app.include_router(assistant_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
