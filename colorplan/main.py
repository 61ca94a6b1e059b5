from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from colorplan.config import Settings, get_settings
from colorplan.health import router as health_router
from colorplan.mcp_server import build_mcp_server
from colorplan.planner_view import router as planner_router
from colorplan.services import PlannerService
from colorplan.tools.appointment import router as appointment_router
from colorplan.tools.view import router as view_router


def configure_logging(level: str = "INFO") -> None:
    """Ensure application logs use the configured level."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(level.upper())


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info("Application settings on startup: %s", settings.model_dump())
    logger.info("Planner ready with %s appointments.", len(app.state.planner.store))
    async with app.state.mcp.session_manager.run():
        try:
            yield  # The application is now running
        finally:
            logger.info("Application shutdown complete.")


def create_app(
    settings: Optional[Settings] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    now = (clock or datetime.now)()

    app = FastAPI(
        title=settings.app_name,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.planner = PlannerService.with_sample_data(
        now.date(),
        seed=settings.seed_sample_data,
        view_type=settings.default_view_type,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.cors_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Include Routers and Mounts ---

    app.include_router(appointment_router, prefix="/tools/appointments")
    app.include_router(view_router, prefix="/tools/view")
    app.include_router(planner_router)
    app.include_router(health_router)

    # Mount the MCP Streamable HTTP server at /mcp
    app.state.mcp = build_mcp_server(app.state.planner, clock or datetime.now)
    app.mount("/mcp", app.state.mcp.streamable_http_app())

    return app


app = create_app()
