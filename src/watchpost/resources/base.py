"""Base class for resources that carry their own alarms."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any, ClassVar

from watchpost.common.config import WatchpostSettings
from watchpost.common.errors import CollaboratorError
from watchpost.common.schemas import AlarmDefinition, AlarmOptions, MetricOptions
from watchpost.monitoring.alarms import Alarm, AlarmSink
from watchpost.monitoring.metrics import Metric
from watchpost.monitoring.profile import MonitoringProfile
from watchpost.resources.scope import Scope


class MonitoredResource:
    """A resource that attaches its declared alarms when it is defined.

    Subclasses name their namespace and metrics, and must set whatever
    ``dimensions`` needs before calling ``super().__init__``.
    """

    namespace: ClassVar[str] = ""
    metric_names: ClassVar[frozenset[str]] = frozenset()
    default_statistic: ClassVar[str] = "Average"
    default_period: ClassVar[timedelta] = timedelta(minutes=5)

    def __init__(
        self,
        scope: Scope,
        resource_id: str,
        *,
        alarms: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None = None,
        sink: AlarmSink | None = None,
        settings: WatchpostSettings | None = None,
    ) -> None:
        self.node = Scope(resource_id, scope)
        self._monitoring = MonitoringProfile(self, alarms, owner=self.node, sink=sink, settings=settings)

    @property
    def dimensions(self) -> dict[str, str]:
        return {}

    @property
    def monitoring(self) -> MonitoringProfile:
        return self._monitoring

    @property
    def alarms(self) -> tuple[Alarm, ...]:
        return self._monitoring.alarms

    def alarm_defaults(
        self,
        metric_name: str,
        definition: AlarmDefinition,
        settings: WatchpostSettings,
    ) -> AlarmOptions | None:
        """Computed defaults for a declared alarm; none by default."""
        return None

    def metric(self, metric_name: str, options: MetricOptions | None = None) -> Metric:
        """Return the named metric for this resource."""
        if metric_name not in self.metric_names:
            raise CollaboratorError(f"{self.namespace} does not publish a {metric_name!r} metric")
        metric = Metric(
            namespace=self.namespace,
            metric_name=metric_name,
            statistic=self.default_statistic,
            period=self.default_period,
            dimensions=self.dimensions,
        )
        return metric.with_options(options)


__all__ = ["MonitoredResource"]
