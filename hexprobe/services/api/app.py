# hexprobe/services/api/app.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexprobe.common.settings import get_settings
from hexprobe.services.api.errors import install_error_handlers
from hexprobe.services.api.routers import convert, health, metadata, probe


def create_app() -> FastAPI:
    cfg = get_settings()
    dev = cfg.app_env.lower() == "development"
    app = FastAPI(
        title="Hexprobe API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if dev else cfg.api.cors_allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )
    install_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(probe.router)
    app.include_router(convert.router)
    app.include_router(metadata.router)
    return app


app = create_app()
