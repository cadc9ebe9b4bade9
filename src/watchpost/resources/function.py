"""Function resource with one-call monitors for its standard metrics.

Every function starts from ``FunctionConfig`` defaults; the ``monitor_*``
helpers build an alarm definition with sensible statistics and hand it to
the function's monitoring profile.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from watchpost.common.config import WatchpostSettings
from watchpost.common.constants import AlarmStateKind
from watchpost.common.errors import ConfigurationError
from watchpost.common.schemas import AlarmDefinition, AlarmOptions, MetricOptions
from watchpost.monitoring.alarms import Alarm, AlarmSink
from watchpost.monitoring.metrics import format_threshold
from watchpost.monitoring.profile import duration_threshold
from watchpost.resources.base import MonitoredResource
from watchpost.resources.scope import Scope

logger = logging.getLogger(__name__)

OptionsInput = MetricOptions | AlarmOptions | Mapping[str, Any] | None


# --- Configuration ---


@dataclass(frozen=True)
class FunctionConfig:
    """Base options applied to every function before user overrides."""

    memory_size: int = 1024
    timeout: timedelta | None = timedelta(seconds=5)
    retry_attempts: int = 2
    reserved_concurrent_executions: int | None = 1
    log_retention_days: int = 7
    tracing: str = "Active"
    environment: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EventTarget:
    """Event rule target that invokes a function."""

    function_name: str
    dead_letter_queue: Any = None
    retry_attempts: int | None = None
    max_event_age: timedelta | None = None


# --- Function ---


class MonitoredFunction(MonitoredResource):
    """Function plus its declared alarms and monitor helpers."""

    namespace = "AWS/Lambda"
    metric_names = frozenset(
        {
            "ConcurrentExecutions",
            "DeadLetterErrors",
            "Duration",
            "Errors",
            "Invocations",
            "IteratorAge",
            "Throttles",
        }
    )

    def __init__(
        self,
        scope: Scope,
        resource_id: str,
        *,
        handler: str,
        function_name: str | None = None,
        config: FunctionConfig | None = None,
        alarms: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None = None,
        sink: AlarmSink | None = None,
        settings: WatchpostSettings | None = None,
        **overrides: Any,
    ) -> None:
        self.handler = handler
        self.function_name = function_name or resource_id
        self.config = dataclasses.replace(config or FunctionConfig(), **overrides)
        super().__init__(scope, resource_id, alarms=alarms, sink=sink, settings=settings)

    @property
    def timeout(self) -> timedelta | None:
        return self.config.timeout

    @property
    def dimensions(self) -> dict[str, str]:
        return {"FunctionName": self.function_name}

    # --- Bulk action routing ---

    def configure_alarm_actions(self, *targets: Any) -> None:
        self.monitoring.attach_actions_to_all(targets, AlarmStateKind.ALARM)

    def configure_ok_actions(self, *targets: Any) -> None:
        self.monitoring.attach_actions_to_all(targets, AlarmStateKind.OK)

    def configure_insufficient_data_actions(self, *targets: Any) -> None:
        self.monitoring.attach_actions_to_all(targets, AlarmStateKind.INSUFFICIENT_DATA)

    # --- Monitors ---

    def monitor_errors(
        self,
        errors_per_minute: float = 0,
        metric_options: OptionsInput = None,
        alarm_options: OptionsInput = None,
    ) -> Alarm:
        """Alarm on errors, summed per minute over 3 evaluation periods by default."""
        return self._monitor_rate("Errors", "errors", errors_per_minute, metric_options, alarm_options)

    def monitor_throttles(
        self,
        throttles_per_minute: float = 0,
        metric_options: OptionsInput = None,
        alarm_options: OptionsInput = None,
    ) -> Alarm:
        """Alarm on throttles, summed per minute over 3 evaluation periods by default."""
        return self._monitor_rate("Throttles", "throttles", throttles_per_minute, metric_options, alarm_options)

    def monitor_invocations(
        self,
        invocations_per_minute: float,
        metric_options: OptionsInput = None,
        alarm_options: OptionsInput = None,
    ) -> Alarm:
        """Alarm on invocations, summed per minute over 3 evaluation periods by default."""
        return self._monitor_rate(
            "Invocations", "invocations", invocations_per_minute, metric_options, alarm_options
        )

    def monitor_duration(
        self,
        timeout_percent: float | None = None,
        metric_options: OptionsInput = None,
        alarm_options: OptionsInput = None,
    ) -> Alarm:
        """Alarm when p99 duration reaches a percentage of the timeout.

        The threshold is resolved before anything is created; a function
        without a timeout raises ConfigurationError.
        """
        if timeout_percent is None:
            timeout_percent = self.monitoring.settings.default_timeout_percent

        computed = self._duration_defaults(timeout_percent)
        return self.monitoring.attach("Duration", self._definition(metric_options, alarm_options), computed)

    def alarm_defaults(
        self,
        metric_name: str,
        definition: AlarmDefinition,
        settings: WatchpostSettings,
    ) -> AlarmOptions | None:
        """Derive a declared Duration alarm's threshold from the timeout.

        Only used when the declaration leaves the threshold out; an explicit
        threshold needs no timeout.
        """
        if metric_name != "Duration" or definition.alarm_options.threshold is not None:
            return None
        return self._duration_defaults(settings.default_timeout_percent)

    def _duration_defaults(self, timeout_percent: float) -> AlarmOptions:
        threshold = duration_threshold(self.timeout, timeout_percent, self.function_name)
        seconds = threshold.total_seconds()
        description = (
            f"p99 latency >= {format_threshold(seconds)}s "
            f"({format_threshold(timeout_percent)}% of {format_threshold(self.timeout.total_seconds())}s)"
        )
        return AlarmOptions.parse({"threshold": seconds * 1000, "alarm_description": description}, "Duration")

    def _monitor_rate(
        self,
        metric_name: str,
        label: str,
        per_minute: float,
        metric_options: OptionsInput,
        alarm_options: OptionsInput,
    ) -> Alarm:
        computed = AlarmOptions.parse({"threshold": per_minute}, metric_name)
        if computed.threshold is None:
            raise ConfigurationError(f"no threshold configured for the {metric_name} alarm")
        computed = computed.model_copy(
            update={"alarm_description": f"Over {format_threshold(computed.threshold)} {label} per minute"}
        )
        return self.monitoring.attach(metric_name, self._definition(metric_options, alarm_options), computed)

    @staticmethod
    def _definition(metric_options: OptionsInput, alarm_options: OptionsInput) -> AlarmDefinition:
        return AlarmDefinition.parse({"metric_options": metric_options, "alarm_options": alarm_options})

    # --- Event targets ---

    def event_target(
        self,
        dead_letter_queue: Any = None,
        retry_attempts: int | None = None,
        max_event_age: timedelta | None = None,
    ) -> EventTarget:
        """Target for event rules that invokes this function."""
        if dead_letter_queue is None:
            logger.warning("dead_letter_queue not configured for %s event target", self.function_name)
        return EventTarget(
            function_name=self.function_name,
            dead_letter_queue=dead_letter_queue,
            retry_attempts=retry_attempts,
            max_event_age=max_event_age,
        )


__all__ = ["EventTarget", "FunctionConfig", "MonitoredFunction"]
