from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from notes_api.api import auth, notes
from notes_api.config import Settings
from notes_api.errors import register_exception_handlers
from notes_api.middleware.request_logger import RequestLoggingMiddleware
from notes_api.storage.backends import open_stores
from notes_api.utils.auth_hash import PasswordHasher
from notes_api.utils.jwt_auth import TokenSigner

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    # no-op when handlers are already installed (uvicorn, pytest)
    logging.basicConfig(
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with its stores, token signer and password hasher.

    Stores are opened when the app starts and closed when it stops.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if settings.uses_insecure_key:
            logger.warning("JWT_KEY is not set; tokens are signed with the default insecure key")
        app.state.stores = open_stores(settings)
        logger.info("Notes API started")
        try:
            yield
        finally:
            app.state.stores.close()
            logger.info("Notes API stopped")

    app = FastAPI(title="Notes API", lifespan=lifespan)
    app.state.settings = settings
    app.state.token_signer = TokenSigner(
        settings.jwt_key,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(seconds=settings.jwt_expiry_seconds),
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "hello world"

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(auth.router)
    app.include_router(notes.router)
    return app


app = create_app()
