"""Result reduction — pair checks with outcomes and roll them up."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from .host import HostMetrics


class _Named(Protocol):
    @property
    def name(self) -> str: ...


@dataclass
class CheckResult:
    name: str
    active: bool


@dataclass
class CategoryReport:
    """Roll-up for one category (apis / functions).

    ``status`` is None for a category that was not configured at all; that
    placeholder serializes to ``{}`` so the key is still present in the report.
    """

    status: bool | None = None
    services: list[CheckResult] | None = None

    @property
    def configured(self) -> bool:
        return self.status is not None

    def to_dict(self) -> dict[str, Any]:
        if not self.configured:
            return {}
        return {
            "status": self.status,
            "services": [asdict(s) for s in self.services or []],
        }


@dataclass
class CompositeReport:
    server: HostMetrics
    apis: CategoryReport = field(default_factory=CategoryReport)
    functions: CategoryReport = field(default_factory=CategoryReport)

    @property
    def healthy(self) -> bool:
        """True when every configured category is up. Host metrics never count."""
        return all(c.status for c in (self.apis, self.functions) if c.configured)

    def to_dict(self) -> dict[str, Any]:
        return {
            "server": asdict(self.server),
            "apis": self.apis.to_dict(),
            "functions": self.functions.to_dict(),
        }


def all_ok(outcomes: Iterable[bool]) -> bool:
    """AND-reduce outcomes; an empty sequence is healthy."""
    return all(outcomes)


def status_reply(checks: Sequence[_Named], outcomes: Sequence[bool]) -> CategoryReport:
    """Pair each check with its outcome by position."""
    if len(checks) != len(outcomes):
        raise ValueError(f"Got {len(outcomes)} outcomes for {len(checks)} checks")
    services = [CheckResult(name=c.name, active=bool(ok)) for c, ok in zip(checks, outcomes)]
    return CategoryReport(status=all_ok(outcomes), services=services)
