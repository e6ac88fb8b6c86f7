"""Host metrics — process memory, uptime, load, free memory, root disk."""

from __future__ import annotations

import asyncio
import logging
import os
import socket
import time
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)

DISK_UNAVAILABLE = -1.0


@dataclass
class HostMetrics:
    process_memory_used_percent: float
    uptime_minutes: float
    cpu_one_minute_average_percent: float
    cpu_five_minute_average_percent: float
    hostname: str
    os_free_memory_mb: float
    disk_root_use_percent: float


def _percent(part: float, whole: float) -> float:
    return round(part / whole * 100, 2)


def cpu_percent(load: float) -> float:
    """Convert a load-average sample into a percentage of logical CPUs."""
    num_cpu = psutil.cpu_count(logical=True) or 1
    return _percent(load, num_cpu)


def disk_use_percent(path: str = "/") -> float:
    """Root filesystem usage, or -1 when it can't be measured."""
    try:
        usage = psutil.disk_usage(path)
        return _percent(usage.used, usage.total)
    except Exception as e:
        logger.warning("Disk usage unavailable for %s: %s", path, e)
        return DISK_UNAVAILABLE


def _snapshot(disk_root_use_percent: float) -> HostMetrics:
    process = psutil.Process(os.getpid())
    vm = psutil.virtual_memory()
    load_1, load_5, _ = psutil.getloadavg()
    uptime_seconds = time.time() - process.create_time()

    return HostMetrics(
        process_memory_used_percent=_percent(process.memory_info().rss, vm.total),
        uptime_minutes=round(uptime_seconds / 60, 2),
        cpu_one_minute_average_percent=cpu_percent(load_1),
        cpu_five_minute_average_percent=cpu_percent(load_5),
        hostname=socket.gethostname(),
        os_free_memory_mb=round(vm.available / (1024 * 1024), 2),
        disk_root_use_percent=disk_root_use_percent,
    )


async def collect_host_metrics(disk_path: str = "/") -> HostMetrics:
    """Snapshot process/host metrics. The disk query runs in a worker thread."""
    disk = await asyncio.to_thread(disk_use_percent, disk_path)
    return _snapshot(disk)
