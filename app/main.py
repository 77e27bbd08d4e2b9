# app/main.py

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.v1.api import api_router
from app.core.config import Settings, settings as default_settings
from app.core.logging_config import configure_logging
from app.services.user_store import UserStore, build_user_store

logger = logging.getLogger("users.main")


def create_application(
    store: Optional[UserStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
    )

    app.state.settings = settings
    app.state.user_store = store or build_user_store(settings)
    logger.info(f"Starting {settings.PROJECT_NAME} with {type(app.state.user_store).__name__}")

    # ---------- CORS ----------
    if settings.backend_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.backend_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # ---------- ERRORS ----------
    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    return app


app = create_application()
