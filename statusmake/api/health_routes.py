"""Health route — wraps the orchestrator as a GET endpoint that never fails.

The endpoint answers 200 no matter what: all checks up, some down, or the
orchestration itself blowing up. In the last case the body carries only the
error message, and the exception goes to the optional error sink.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from statusmake.config import settings
from statusmake.health.checks import InspectionSet
from statusmake.health.orchestrator import RESPONSE_STATUS, orchestrate

logger = logging.getLogger(__name__)

ErrorSink = Callable[[BaseException], Any]

# Strong refs to pending async sink calls so they aren't collected mid-flight
_sink_tasks: set[asyncio.Task[Any]] = set()


def _report_error(error_sink: ErrorSink | None, exc: BaseException) -> None:
    """Forward ``exc`` to the sink without waiting on it or letting it fail the route."""
    if error_sink is None:
        return
    try:
        result = error_sink(exc)
    except Exception:
        logger.exception("Error sink raised")
        return

    if inspect.isawaitable(result):
        task = asyncio.ensure_future(result)
        _sink_tasks.add(task)
        task.add_done_callback(_sink_done)


def _sink_done(task: asyncio.Task[Any]) -> None:
    _sink_tasks.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.error("Error sink failed", exc_info=task.exception())


def get_route_handler(
    inspection: InspectionSet,
    error_sink: ErrorSink | None = None,
    timeout: float | None = None,
    disk_path: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Callable[[], Awaitable[JSONResponse]]:
    """Build a GET handler bound to a fixed inspection set."""

    async def health_check() -> JSONResponse:
        try:
            info = await orchestrate(
                inspection,
                timeout=timeout if timeout is not None else settings.probe_timeout_seconds,
                disk_path=disk_path if disk_path is not None else settings.disk_path,
                transport=transport,
            )
        except Exception as e:
            logger.exception("Health orchestration failed")
            _report_error(error_sink, e)
            return JSONResponse(
                status_code=RESPONSE_STATUS,
                content={"status": RESPONSE_STATUS, "data": {"message": str(e)}},
            )
        return JSONResponse(status_code=info["status"], content=info)

    return health_check


def setup_endpoints(
    app: FastAPI | APIRouter,
    route_uri: str,
    inspection: InspectionSet,
    error_sink: ErrorSink | None = None,
    **handler_kwargs: Any,
) -> None:
    """Register the health handler on ``app`` at ``route_uri``."""
    app.add_api_route(
        route_uri,
        get_route_handler(inspection, error_sink=error_sink, **handler_kwargs),
        methods=["GET"],
        name="health_check",
        tags=["health"],
    )
    logger.info("Health endpoint registered at %s", route_uri)
