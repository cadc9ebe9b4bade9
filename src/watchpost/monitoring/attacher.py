"""Attach one alarm per declared metric to a metric-producing resource.

Options are merged with a single precedence rule, applied the same way for
every alarm kind::

    explicit user value  >  computed default  >  static default

Static defaults are the per-metric statistic table and the settings
(evaluation periods, period). Computed defaults come from the caller, e.g.
a threshold derived from a function's timeout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Final

from pydantic import BaseModel

from watchpost.common.config import WatchpostSettings
from watchpost.common.constants import (
    ALARM_ID_SUFFIX,
    AlarmStateKind,
    ComparisonOperator,
    TreatMissingData,
)
from watchpost.common.errors import ConfigurationError
from watchpost.common.schemas import AlarmDefinition, AlarmOptions, MetricOptions
from watchpost.monitoring.alarms import (
    Alarm,
    AlarmCreateOptions,
    AlarmOwner,
    AlarmRegistry,
    AlarmSink,
    InMemoryAlarmSink,
)
from watchpost.monitoring.metrics import (
    Metric,
    MetricSource,
    describe_period,
    format_threshold,
    static_metric_options,
)

logger = logging.getLogger(__name__)

Layer = Mapping[str, Any] | BaseModel | None

_ROUTES: Final[dict[AlarmStateKind, Callable[..., None]]] = {
    AlarmStateKind.ALARM: Alarm.add_alarm_action,
    AlarmStateKind.OK: Alarm.add_ok_action,
    AlarmStateKind.INSUFFICIENT_DATA: Alarm.add_insufficient_data_action,
}


def alarm_id_for(metric_name: str) -> str:
    return f"{metric_name}{ALARM_ID_SUFFIX}"


def merge_options(*layers: Layer) -> dict[str, Any]:
    """Merge option layers given lowest precedence first.

    Unset and ``None`` values never override a lower layer.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        if isinstance(layer, BaseModel):
            values = layer.model_dump(exclude_none=True)
        else:
            values = {key: value for key, value in layer.items() if value is not None}
        merged.update(values)
    return merged


def resolve_metric(
    metric_name: str,
    source: MetricSource,
    metric_options: MetricOptions | None,
    settings: WatchpostSettings,
) -> Metric:
    """Ask the source for the metric with defaults and overrides applied."""
    merged = merge_options(static_metric_options(metric_name, settings), metric_options)
    return source.metric(metric_name, MetricOptions(**merged) if merged else None)


def resolve_alarm_options(
    metric_name: str,
    metric: Metric,
    alarm_options: Layer,
    computed: Layer,
    settings: WatchpostSettings,
) -> AlarmCreateOptions:
    static = {
        "evaluation_periods": settings.default_evaluation_periods,
        "comparison_operator": ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
        "treat_missing_data": TreatMissingData.MISSING,
    }
    merged = merge_options(static, computed, alarm_options)

    threshold = merged.get("threshold")
    if threshold is None:
        raise ConfigurationError(f"no threshold configured for the {metric_name} alarm")
    merged["threshold"] = float(threshold)
    merged.setdefault(
        "alarm_description",
        f"Over {format_threshold(threshold)} {metric_name} per {describe_period(metric.period)}",
    )
    return AlarmCreateOptions(metric=metric, **merged)


def route_actions(alarm: Alarm, actions: Mapping[AlarmStateKind, tuple[Any, ...]] | None) -> None:
    """Register each state's targets through the matching alarm method."""
    if not actions:
        return
    for state, targets in actions.items():
        if targets:
            _ROUTES[state](alarm, *targets)


def broadcast_action(registry: AlarmRegistry, state: AlarmStateKind | str, *targets: Any) -> None:
    """Add the targets for ``state`` to every alarm in the registry."""
    try:
        kind = AlarmStateKind(state)
    except ValueError as exc:
        raise ConfigurationError(f"unknown alarm state {state!r}") from exc

    route = _ROUTES[kind]
    for alarm in registry:
        route(alarm, *targets)
    logger.debug("Broadcast %d %s action(s) to %d alarm(s)", len(targets), kind, len(registry))


def attach_alarm(
    metric_name: str,
    definition: AlarmDefinition | Mapping[str, Any] | None,
    source: MetricSource,
    owner: AlarmOwner,
    *,
    sink: AlarmSink | None = None,
    registry: AlarmRegistry | None = None,
    computed: AlarmOptions | Mapping[str, Any] | None = None,
    settings: WatchpostSettings | None = None,
) -> Alarm:
    """Create the alarm for ``metric_name`` and route its actions.

    Args:
        metric_name: Metric to watch; also names the alarm.
        definition: Declared metric options, alarm options and actions.
        source: Resource the metric is requested from.
        owner: Scope the alarm is registered under.
        sink: Creates the alarm; defaults to an in-memory sink.
        registry: Per-resource registry the alarm is added to, if any.
        computed: Defaults derived by the caller, below explicit options.
        settings: Static defaults.

    Raises:
        ConfigurationError: empty metric name, unresolved threshold, or an
            alarm for this metric already exists.
    """
    if not metric_name or not metric_name.strip():
        raise ConfigurationError("metric name must be non-empty")

    definition = AlarmDefinition.parse(definition)
    if computed is not None:
        computed = AlarmOptions.parse(computed, metric_name)
    settings = settings or WatchpostSettings()
    sink = sink or InMemoryAlarmSink()

    alarm_id = alarm_id_for(metric_name)
    if registry is not None and alarm_id in registry:
        raise ConfigurationError(f"an alarm for {metric_name!r} already exists on {owner.path}")

    metric = resolve_metric(metric_name, source, definition.metric_options, settings)
    options = resolve_alarm_options(metric_name, metric, definition.alarm_options, computed, settings)

    alarm = sink.create_alarm(owner, alarm_id, options)
    if registry is not None:
        registry.add(alarm)

    route_actions(alarm, definition.actions)
    return alarm


__all__ = [
    "alarm_id_for",
    "attach_alarm",
    "broadcast_action",
    "merge_options",
    "resolve_alarm_options",
    "resolve_metric",
    "route_actions",
]
