"""Runs host metrics, endpoint probes and function checks side by side."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .checks import DEFAULT_TIMEOUT_SECONDS, InspectionSet, execute_apis, execute_functions
from .host import collect_host_metrics
from .report import CategoryReport, CompositeReport, status_reply

logger = logging.getLogger(__name__)

# Always 200, even when checks fail. A 5xx makes the load balancer pull the
# box out of the pool after a few failures, and then nobody can log in to
# investigate. Health is reported in the body's status flags instead.
RESPONSE_STATUS = 200


async def _apis_report(
    inspection: InspectionSet,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
) -> CategoryReport:
    if inspection.apis is None:
        return CategoryReport()
    outcomes = await execute_apis(inspection.apis, timeout=timeout, transport=transport)
    return status_reply(inspection.apis, outcomes)


async def _functions_report(inspection: InspectionSet) -> CategoryReport:
    if inspection.functions is None:
        return CategoryReport()
    outcomes = await execute_functions(inspection.functions)
    return status_reply(inspection.functions, outcomes)


async def build_report(
    inspection: InspectionSet,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    disk_path: str = "/",
    transport: httpx.AsyncBaseTransport | None = None,
) -> CompositeReport:
    server, apis, functions = await asyncio.gather(
        collect_host_metrics(disk_path),
        _apis_report(inspection, timeout, transport),
        _functions_report(inspection),
    )
    report = CompositeReport(server=server, apis=apis, functions=functions)
    logger.debug("Health report built: healthy=%s", report.healthy)
    return report


async def orchestrate(
    inspection: InspectionSet,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    disk_path: str = "/",
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Build the composite report and wrap it in the response envelope."""
    report = await build_report(inspection, timeout=timeout, disk_path=disk_path, transport=transport)
    return {"status": RESPONSE_STATUS, "data": report.to_dict()}
