"""Metric values and the capability that produces them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

from watchpost.common.config import WatchpostSettings
from watchpost.common.constants import STATIC_METRIC_STATISTICS
from watchpost.common.schemas import MetricOptions


@dataclass(frozen=True)
class Metric:
    """A named, time-aggregated signal emitted by a resource."""

    namespace: str
    metric_name: str
    statistic: str = "Average"
    period: timedelta = timedelta(minutes=5)
    dimensions: dict[str, str] = field(default_factory=dict)

    def with_options(self, options: MetricOptions | None) -> Metric:
        """Return a copy with every option that is set applied on top."""
        if options is None:
            return self
        return dataclasses.replace(self, **options.model_dump(exclude_none=True))


@runtime_checkable
class MetricSource(Protocol):
    """Anything that can produce a metric by name."""

    def metric(self, metric_name: str, options: MetricOptions | None = None) -> Metric: ...


def static_metric_options(metric_name: str, settings: WatchpostSettings) -> dict[str, Any] | None:
    """Built-in statistic and period for well-known metrics, if any."""
    statistic = STATIC_METRIC_STATISTICS.get(metric_name)
    if statistic is None:
        return None
    return {"statistic": statistic, "period": settings.default_period}


def format_threshold(value: float) -> str:
    """Render a threshold without a trailing ``.0``."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def describe_period(period: timedelta) -> str:
    """Human-readable period: ``minute``, ``5 minutes``, ``30 seconds``."""
    total = period.total_seconds()
    if not total.is_integer():
        return f"{total:g} seconds"

    seconds = int(total)
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60), ("second", 1)):
        if seconds % size == 0:
            count = seconds // size
            return unit if count == 1 else f"{count} {unit}s"
    return f"{seconds} seconds"


__all__ = [
    "Metric",
    "MetricSource",
    "static_metric_options",
    "format_threshold",
    "describe_period",
]
