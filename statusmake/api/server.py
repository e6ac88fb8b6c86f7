"""FastAPI server exposing the aggregated health endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statusmake import __version__
from statusmake.api.health_routes import ErrorSink, setup_endpoints
from statusmake.config import settings
from statusmake.health.checks import InspectionSet
from statusmake.health.inspection import load_inspection_set

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    inspection: InspectionSet = app.state.inspection
    logger.info(
        "statusmake serving %s — %d apis, %d functions",
        app.state.route_path,
        len(inspection.apis or []),
        len(inspection.functions or []),
    )
    yield


def create_app(
    inspection: InspectionSet | None = None,
    error_sink: ErrorSink | None = None,
    route_path: str | None = None,
) -> FastAPI:
    """Build the app. Without an explicit inspection set, the configured file is loaded."""
    if inspection is None:
        inspection = load_inspection_set(settings.inspection_file)
    route_path = route_path or settings.route_path

    app = FastAPI(
        title="statusmake",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.inspection = inspection
    app.state.route_path = route_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    setup_endpoints(app, route_path, inspection, error_sink=error_sink)
    return app
