from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogs import router as blogs_router
from core import db
from core.errors import register_error_handlers
from core.observability import setup_logging

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # One pool per process; handlers get it through db.get_pool.
    app.state.db_pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.db_pool)
        app.state.db_pool = None


def create_app() -> FastAPI:
    app = FastAPI(title="blogs-api", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(blogs_router.router, tags=["blogs"])

    @app.get("/health")
    @app.get("/health_check")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/health/db")
    async def health_db(pool=Depends(db.get_pool)) -> JSONResponse:
        if await db.ping(pool):
            return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )

    @app.get("/")
    def root() -> dict:
        return {"message": "blogs api"}

    return app


app = create_app()
