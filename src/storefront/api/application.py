"""FastAPI application factory.

The factory only wires the HTTP surface; initializing the domain is the
caller's job (see ``src/app.py`` and the test fixtures).
"""

import os
import time
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from protean.domain import Domain

from storefront.api.errors import register_exception_handlers
from storefront.api import router

logger = structlog.get_logger(__name__)


def _allowed_origins() -> list[str]:
    origins = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def create_app(domain: Domain) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Shopper accounts, carts, favorites and order history",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and log one line per request."""
        started = time.perf_counter()
        with domain.domain_context():
            response = await call_next(request)
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Welcome to the Storefront API"

    @app.get("/health")
    @app.get("/api/status")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "timestamp": datetime.now(UTC).isoformat(),
                "domain": {"name": domain.name},
            }
        )

    return app
