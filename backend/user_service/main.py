"""FastAPI application factory.

`create_app` wires settings, the database, middleware, exception
handlers and one of the two route sets:

- `API_STYLE=rest`: path-parameter endpoints with `{data}` / `{error}`
  bodies (see `routes_rest`)
- `API_STYLE=envelope`: fixed-path endpoints exchanging request/response
  envelopes (see `routes_envelope`)

`GET /health` is mounted in both cases.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from . import routes_envelope, routes_rest
from .config import Settings, settings as default_settings
from .database import Database

logger = logging.getLogger("user_service.api")


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application for `settings` (module settings by default)."""
    settings = settings or default_settings
    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)
    database = database or Database(settings.DATABASE_URL, echo=settings.DB_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        logger.info("database ready url=%s style=%s", database.engine.url.render_as_string(hide_password=True), settings.API_STYLE)
        yield
        database.dispose()

    app = FastAPI(title="User Directory API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database

    # Wide-open CORS keeps local HTML testers working without extra config in dev.
    if settings.ALLOW_DEV_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        record = {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
        }
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            record["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception("request_failed %s", json.dumps(record, ensure_ascii=True))
            raise
        response.headers["X-Request-ID"] = req_id
        record["status_code"] = response.status_code
        record["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info("request_done %s", json.dumps(record, ensure_ascii=True))
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("storage error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=400, content={"error": "storage error"})

    if settings.API_STYLE == "envelope":
        app.include_router(routes_envelope.router)
    else:
        app.include_router(routes_rest.router)

    @app.get("/health")
    def health():
        """Lightweight health check for uptime monitoring."""
        return {"status": "ok"}

    return app


app = create_app()
