import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import date

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .api import api_router, pages_router
from .config import Settings, get_settings
from .errors import AuthFailure, BackendRejected, NetworkFailure, ParseFailure, ValidationFailure
from .middleware import RouteGuardMiddleware
from .services.workspace import Workspace, WorkspaceRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], date] = date.today,
) -> FastAPI:
    """Build the web client application.

    ``transport`` replaces the network transport of the backend HTTP client
    and ``clock`` supplies "today"; both exist for tests.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the shared backend client and close it on shutdown."""
        app.state.http = httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.request_timeout,
            transport=transport,
        )
        logger.info("Using finance backend at %s", settings.api_url)
        yield
        await app.state.http.aclose()

    app = FastAPI(
        title="Finance Tracker",
        description="Dashboard, analytics and budgets for a personal finance tracker",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.workspaces = WorkspaceRegistry(
        lambda client: Workspace(client, clock=clock, currency_symbol=settings.currency_symbol),
        max_size=settings.max_workspaces,
    )

    app.add_middleware(RouteGuardMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AuthFailure)
    async def auth_failure(request: Request, exc: AuthFailure):
        logger.info("Redirecting to login: %s", exc.message)
        return RedirectResponse(settings.login_path, status_code=303)

    @app.exception_handler(ValidationFailure)
    async def validation_failure(request: Request, exc: ValidationFailure):
        return JSONResponse({"error": exc.message, "field": exc.field}, status_code=422)

    @app.exception_handler(BackendRejected)
    async def backend_rejected(request: Request, exc: BackendRejected):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(NetworkFailure)
    async def network_failure(request: Request, exc: NetworkFailure):
        logger.error("Network failure: %s", exc.message)
        return JSONResponse(
            {"error": "Network error. Please check your connection and try again."},
            status_code=502,
        )

    @app.exception_handler(ParseFailure)
    async def parse_failure(request: Request, exc: ParseFailure):
        logger.error("Unreadable backend response: %s", exc.message)
        return JSONResponse({"error": "Unexpected response from the server."}, status_code=502)

    app.include_router(pages_router)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
