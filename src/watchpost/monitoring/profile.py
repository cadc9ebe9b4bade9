"""Per-resource monitoring profile.

A profile owns the declared alarms of one resource. Every declaration is
attached when the profile is built; afterwards actions can be routed to all
alarms at once.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from datetime import timedelta
from enum import StrEnum
from typing import Any

from watchpost.common.config import WatchpostSettings
from watchpost.common.constants import AlarmStateKind
from watchpost.common.errors import ConfigurationError
from watchpost.common.schemas import AlarmDefinition, AlarmOptions, as_targets, parse_declarations
from watchpost.monitoring.alarms import Alarm, AlarmOwner, AlarmRegistry, AlarmSink, InMemoryAlarmSink
from watchpost.monitoring.attacher import alarm_id_for, attach_alarm, broadcast_action
from watchpost.monitoring.metrics import MetricSource

logger = logging.getLogger(__name__)


class ProfileState(StrEnum):
    """Construction phase of a profile."""

    UNPOPULATED = "unpopulated"
    POPULATED = "populated"


def duration_threshold(
    timeout: timedelta | None,
    timeout_percent: float,
    resource_name: str = "resource",
) -> timedelta:
    """Latency threshold as a percentage of a configured timeout."""
    if not timeout:
        raise ConfigurationError(f"timeout not configured for {resource_name}")
    if (
        isinstance(timeout_percent, bool)
        or not isinstance(timeout_percent, (int, float))
        or not math.isfinite(timeout_percent)
        or timeout_percent <= 0
    ):
        raise ConfigurationError(f"timeout percent must be a positive number, got {timeout_percent!r}")
    return timeout * (timeout_percent / 100)


class MonitoringProfile:
    """Declared alarms for one resource and the registry of created alarms.

    Args:
        resource: Metric source the alarms watch. If it has an
            ``alarm_defaults(metric_name, definition, settings)`` method, its
            result is the computed layer for each declared alarm.
        declarations: Metric name -> alarm definition (or plain mapping).
        owner: Scope the alarms are registered under; defaults to
            ``resource.node``.
        sink: Creates the alarms; defaults to an in-memory sink.
        settings: Static defaults.
    """

    def __init__(
        self,
        resource: MetricSource,
        declarations: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None = None,
        *,
        owner: AlarmOwner | None = None,
        sink: AlarmSink | None = None,
        settings: WatchpostSettings | None = None,
    ) -> None:
        owner = owner if owner is not None else getattr(resource, "node", None)
        if owner is None:
            raise ConfigurationError("no owning scope to register alarms under")

        self._resource = resource
        self._owner = owner
        self._sink = sink or InMemoryAlarmSink()
        self._settings = settings or WatchpostSettings()
        self._registry = AlarmRegistry()
        self._state = ProfileState.UNPOPULATED

        derive = getattr(resource, "alarm_defaults", None)
        for metric_name, definition in parse_declarations(declarations).items():
            computed = derive(metric_name, definition, self._settings) if derive is not None else None
            self.attach(metric_name, definition, computed)

        self._state = ProfileState.POPULATED
        logger.info("Attached %d alarm(s) to %s", len(self._registry), owner.path)

    @property
    def state(self) -> ProfileState:
        return self._state

    @property
    def owner(self) -> AlarmOwner:
        return self._owner

    @property
    def settings(self) -> WatchpostSettings:
        return self._settings

    @property
    def alarms(self) -> tuple[Alarm, ...]:
        return tuple(self._registry)

    def get(self, metric_name: str) -> Alarm | None:
        return self._registry.get(alarm_id_for(metric_name))

    def attach(
        self,
        metric_name: str,
        definition: AlarmDefinition | Mapping[str, Any] | None = None,
        computed: AlarmOptions | Mapping[str, Any] | None = None,
    ) -> Alarm:
        """Attach one alarm and add it to the registry."""
        return attach_alarm(
            metric_name,
            definition,
            self._resource,
            self._owner,
            sink=self._sink,
            registry=self._registry,
            computed=computed,
            settings=self._settings,
        )

    def attach_actions_to_all(self, actions: Any, state: AlarmStateKind | str) -> None:
        """Route ``actions`` for ``state`` on every alarm created so far.

        Additive: earlier actions are kept and membership does not change.
        """
        broadcast_action(self._registry, state, *as_targets(actions))

    def __contains__(self, metric_name: object) -> bool:
        return isinstance(metric_name, str) and alarm_id_for(metric_name) in self._registry

    def __iter__(self) -> Iterator[Alarm]:
        return iter(self._registry)

    def __len__(self) -> int:
        return len(self._registry)


__all__ = ["MonitoringProfile", "ProfileState", "duration_threshold"]
