"""Tests for the host metrics collector."""

from __future__ import annotations

import socket
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from statusmake.health.host import (
    DISK_UNAVAILABLE,
    HostMetrics,
    collect_host_metrics,
    cpu_percent,
    disk_use_percent,
)


class TestCpuPercent:
    @patch("statusmake.health.host.psutil.cpu_count", return_value=4)
    def test_divides_by_logical_cpus(self, _mock) -> None:
        assert cpu_percent(1.0) == 25.0

    @patch("statusmake.health.host.psutil.cpu_count", return_value=2)
    def test_rounds_to_two_decimals(self, _mock) -> None:
        assert cpu_percent(1.23456) == 61.73

    @patch("statusmake.health.host.psutil.cpu_count", return_value=None)
    def test_unknown_cpu_count(self, _mock) -> None:
        assert cpu_percent(0.5) == 50.0


class TestDiskUsePercent:
    @patch(
        "statusmake.health.host.psutil.disk_usage",
        return_value=SimpleNamespace(used=1, total=3),
    )
    def test_percent(self, _mock) -> None:
        assert disk_use_percent("/") == 33.33

    @patch("statusmake.health.host.psutil.disk_usage", side_effect=PermissionError("denied"))
    def test_failure_is_sentinel(self, _mock) -> None:
        assert disk_use_percent("/") == DISK_UNAVAILABLE == -1

    def test_missing_path_is_sentinel(self) -> None:
        assert disk_use_percent("/definitely/not/a/mount/point") == -1


class TestHostMetrics:
    def test_disk_reading_is_required(self) -> None:
        with pytest.raises(TypeError):
            HostMetrics(  # type: ignore[call-arg]
                process_memory_used_percent=1.0,
                uptime_minutes=1.0,
                cpu_one_minute_average_percent=1.0,
                cpu_five_minute_average_percent=1.0,
                hostname="box-1",
                os_free_memory_mb=1.0,
            )


class TestCollectHostMetrics:
    @pytest.mark.asyncio
    async def test_populates_every_field(self) -> None:
        metrics = await collect_host_metrics("/")
        assert isinstance(metrics, HostMetrics)
        assert metrics.hostname == socket.gethostname()
        assert 0 <= metrics.process_memory_used_percent <= 100
        assert metrics.uptime_minutes >= 0
        assert metrics.cpu_one_minute_average_percent >= 0
        assert metrics.cpu_five_minute_average_percent >= 0
        assert metrics.os_free_memory_mb > 0
        assert 0 <= metrics.disk_root_use_percent <= 100

    @pytest.mark.asyncio
    async def test_disk_failure_keeps_other_metrics(self) -> None:
        with patch("statusmake.health.host.psutil.disk_usage", side_effect=OSError("io error")):
            metrics = await collect_host_metrics("/")

        assert metrics.disk_root_use_percent == -1
        assert metrics.hostname == socket.gethostname()
        assert metrics.os_free_memory_mb > 0

    @pytest.mark.asyncio
    async def test_values_rounded(self) -> None:
        metrics = await collect_host_metrics("/")
        for value in (
            metrics.process_memory_used_percent,
            metrics.uptime_minutes,
            metrics.cpu_one_minute_average_percent,
            metrics.os_free_memory_mb,
        ):
            assert round(value, 2) == value
