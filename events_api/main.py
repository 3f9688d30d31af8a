"""
Events API entry point.

Development:
    uvicorn events_api.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException

# ── local modules ───────────────────────────────────────────────────
from . import config
from .controller import EventsController, build_router
from .db import SessionLocal
from .logging import configure_logging
from .models import Event
from .repository import Repository
from .validation import PayloadValidationError
# ────────────────────────────────────────────────────────────────────

logger = logging.getLogger(__name__)


# ───────────────────────── DB migrations (optional) ─────────────────
from alembic import command
from alembic.config import Config

def run_migrations() -> None:
    app_dir = Path(__file__).resolve().parent
    cfg = Config(str(app_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(app_dir / "migrations"))
    cfg.set_main_option("sqlalchemy.url", config.DB_URL)
    command.upgrade(cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # alembic.ini reconfigures logging, so migrate first
    if config.AUTO_MIGRATE:
        run_migrations()
    configure_logging(config.LOG_LEVEL)
    logger.info("Events API starting", extra={"auto_migrate": config.AUTO_MIGRATE})
    yield
    logger.info("Events API shutting down")


# ───────────────────────── Error bodies ─────────────────────────────
def _error_body(status_code: int, message) -> dict:
    return {
        "statusCode": status_code,
        "message": message,
        "error": HTTPStatus(status_code).phrase,
    }


async def payload_validation_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(400, exc.messages))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = err.get("loc", ())
        if loc and loc[0] == "path":
            messages.append("Validation failed (numeric string is expected)")
        else:
            field = ".".join(str(p) for p in loc[1:]) or "payload"
            messages.append(f"{field} {err.get('msg', 'is invalid')}")
    return JSONResponse(status_code=400, content=_error_body(400, messages))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled exception",
        extra={"method": request.method, "path": request.url.path, "error": str(exc)},
        exc_info=True,
    )
    return JSONResponse(status_code=500, content=_error_body(500, "Internal server error"))


# ───────────────────────── App factory ──────────────────────────────
def create_app(session_factory: Optional[sessionmaker] = None) -> FastAPI:
    session_factory = session_factory or SessionLocal

    app = FastAPI(title="Events API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=86400,
    )

    app.add_exception_handler(PayloadValidationError, payload_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    controller = EventsController(Repository(Event, session_factory))
    app.include_router(build_router(controller))

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/dbcheck")
    def dbcheck():
        with session_factory() as db:
            db.execute(text("SELECT 1"))
        return {"db": "ok"}

    return app


app = create_app()
