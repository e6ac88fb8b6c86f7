"""Check definitions — HTTP endpoints and status-producing functions.

Both kinds expose ``evaluate()`` as a coroutine returning a plain bool, so
the probers can fan out over either without caring which is which.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


# ── Models ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HttpCheck:
    """An HTTP endpoint that must answer exactly 200."""

    name: str
    url: str

    async def evaluate(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> bool:
        if client is not None:
            return await probe_endpoint(client, self.url, timeout)
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await probe_endpoint(own_client, self.url, timeout)


@dataclass(frozen=True)
class FunctionCheck:
    """A named zero-argument callable returning a truthy/falsy status."""

    name: str
    fn: Callable[[], Any]

    async def evaluate(self) -> bool:
        try:
            if inspect.iscoroutinefunction(self.fn):
                result = await self.fn()
            else:
                # Plain callables may block; run them in a worker thread
                result = await asyncio.to_thread(self.fn)
                if inspect.isawaitable(result):
                    result = await result
        except Exception:
            logger.warning("Function check '%s' raised", self.name, exc_info=True)
            return False
        return bool(result)


@dataclass(frozen=True)
class InspectionSet:
    """Checks to run on every health request. ``None`` means the category is absent."""

    apis: Sequence[HttpCheck] | None = None
    functions: Sequence[FunctionCheck] | None = None


# ── Probers ──────────────────────────────────────────────────────────────────


async def probe_endpoint(
    client: httpx.AsyncClient,
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> bool:
    """GET ``url`` once. True iff it answers 200; any error counts as down."""
    try:
        resp = await client.get(url, timeout=timeout, follow_redirects=False)
    except httpx.TimeoutException:
        logger.warning("Probe timed out after %.1fs: %s", timeout, url)
        return False
    except Exception as e:
        logger.warning("Probe failed: %s (%s: %s)", url, type(e).__name__, e)
        return False

    if resp.status_code != 200:
        logger.debug("Probe %s answered %d", url, resp.status_code)
        return False
    return True


async def execute_apis(
    apis: Sequence[HttpCheck],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[bool]:
    """Probe every endpoint concurrently; outcomes keep the input order."""
    if not apis:
        return []
    # No pool cap: a probe must never wait on a connection held by a slow sibling
    limits = httpx.Limits(max_connections=None, max_keepalive_connections=None)
    async with httpx.AsyncClient(timeout=timeout, limits=limits, transport=transport) as client:
        return list(await asyncio.gather(*(api.evaluate(client, timeout) for api in apis)))


async def execute_functions(functions: Sequence[FunctionCheck]) -> list[bool]:
    """Invoke every function check concurrently; outcomes keep the input order."""
    if not functions:
        return []
    return list(await asyncio.gather(*(f.evaluate() for f in functions)))
