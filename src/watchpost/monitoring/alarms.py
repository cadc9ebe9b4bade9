"""Alarm handles, the sink that creates them, and the per-resource registry."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from watchpost.common.constants import AlarmStateKind, ComparisonOperator, TreatMissingData
from watchpost.common.errors import ConfigurationError
from watchpost.monitoring.metrics import Metric

logger = logging.getLogger(__name__)


# --- Data Classes ---


@dataclass(frozen=True)
class AlarmCreateOptions:
    """Fully resolved settings for one alarm."""

    metric: Metric
    threshold: float
    evaluation_periods: int
    alarm_description: str | None = None
    comparison_operator: ComparisonOperator = ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD
    treat_missing_data: TreatMissingData = TreatMissingData.MISSING
    datapoints_to_alarm: int | None = None

    def __post_init__(self) -> None:
        if self.evaluation_periods < 1:
            raise ConfigurationError(f"evaluation_periods must be >= 1, got {self.evaluation_periods}")
        if self.datapoints_to_alarm is not None and not (
            1 <= self.datapoints_to_alarm <= self.evaluation_periods
        ):
            raise ConfigurationError(
                f"datapoints_to_alarm must be between 1 and {self.evaluation_periods}, "
                f"got {self.datapoints_to_alarm}"
            )


@dataclass(frozen=True)
class TopicAction:
    """Notification topic an alarm publishes to on a state change."""

    topic_arn: str


# --- Alarm ---


class Alarm:
    """A materialized alarm watching one metric of one resource.

    Settings are fixed at creation; only the per-state action lists grow.
    """

    def __init__(self, alarm_id: str, options: AlarmCreateOptions, path: str = "") -> None:
        self._alarm_id = alarm_id
        self._options = options
        self._path = path or alarm_id
        self._actions: dict[AlarmStateKind, list[Any]] = {kind: [] for kind in AlarmStateKind}

    @property
    def alarm_id(self) -> str:
        return self._alarm_id

    @property
    def path(self) -> str:
        return self._path

    @property
    def options(self) -> AlarmCreateOptions:
        return self._options

    @property
    def metric(self) -> Metric:
        return self._options.metric

    @property
    def threshold(self) -> float:
        return self._options.threshold

    @property
    def evaluation_periods(self) -> int:
        return self._options.evaluation_periods

    @property
    def alarm_description(self) -> str | None:
        return self._options.alarm_description

    def add_action_for_state(self, state: AlarmStateKind | str, *targets: Any) -> None:
        """Append targets to the actions fired when the alarm enters ``state``."""
        try:
            kind = AlarmStateKind(state)
        except ValueError as exc:
            raise ConfigurationError(f"unknown alarm state {state!r}") from exc
        self._actions[kind].extend(targets)
        logger.debug("Added %d %s action(s) to %s", len(targets), kind, self._path)

    def add_alarm_action(self, *targets: Any) -> None:
        self.add_action_for_state(AlarmStateKind.ALARM, *targets)

    def add_ok_action(self, *targets: Any) -> None:
        self.add_action_for_state(AlarmStateKind.OK, *targets)

    def add_insufficient_data_action(self, *targets: Any) -> None:
        self.add_action_for_state(AlarmStateKind.INSUFFICIENT_DATA, *targets)

    def actions_for(self, state: AlarmStateKind | str) -> tuple[Any, ...]:
        return tuple(self._actions[AlarmStateKind(state)])

    @property
    def alarm_actions(self) -> tuple[Any, ...]:
        return self.actions_for(AlarmStateKind.ALARM)

    @property
    def ok_actions(self) -> tuple[Any, ...]:
        return self.actions_for(AlarmStateKind.OK)

    @property
    def insufficient_data_actions(self) -> tuple[Any, ...]:
        return self.actions_for(AlarmStateKind.INSUFFICIENT_DATA)

    def __repr__(self) -> str:
        return f"Alarm({self._path!r}, threshold={self.threshold}, evaluation_periods={self.evaluation_periods})"


# --- Sink ---


class AlarmOwner(Protocol):
    """Scope that alarms are registered under."""

    @property
    def path(self) -> str: ...

    def add_child(self, child_id: str, child: Any) -> None: ...


class AlarmSink(Protocol):
    """Creates alarms and registers them with their owner."""

    def create_alarm(self, owner: AlarmOwner, alarm_id: str, options: AlarmCreateOptions) -> Alarm: ...


class InMemoryAlarmSink:
    """Alarm sink that keeps every alarm it has created."""

    def __init__(self) -> None:
        self._created: list[Alarm] = []

    @property
    def created(self) -> tuple[Alarm, ...]:
        return tuple(self._created)

    def create_alarm(self, owner: AlarmOwner, alarm_id: str, options: AlarmCreateOptions) -> Alarm:
        alarm = Alarm(alarm_id, options, path=f"{owner.path}/{alarm_id}")
        owner.add_child(alarm_id, alarm)
        self._created.append(alarm)
        logger.debug(
            "Created alarm %s on %s/%s (%s over %s, threshold %s)",
            alarm.path,
            options.metric.namespace,
            options.metric.metric_name,
            options.metric.statistic,
            options.metric.period,
            options.threshold,
        )
        return alarm


# --- Registry ---


class AlarmRegistry:
    """Append-only set of alarms created for one resource."""

    def __init__(self) -> None:
        self._alarms: dict[str, Alarm] = {}

    def add(self, alarm: Alarm) -> None:
        if alarm.alarm_id in self._alarms:
            raise ConfigurationError(f"duplicate alarm {alarm.alarm_id!r}")
        self._alarms[alarm.alarm_id] = alarm

    def get(self, alarm_id: str) -> Alarm | None:
        return self._alarms.get(alarm_id)

    def __contains__(self, alarm_id: object) -> bool:
        return alarm_id in self._alarms

    def __iter__(self) -> Iterator[Alarm]:
        return iter(list(self._alarms.values()))

    def __len__(self) -> int:
        return len(self._alarms)


__all__ = [
    "Alarm",
    "AlarmCreateOptions",
    "AlarmOwner",
    "AlarmRegistry",
    "AlarmSink",
    "InMemoryAlarmSink",
    "TopicAction",
]
