"""Monitoring attachment: alarms, the attacher and per-resource profiles."""

from __future__ import annotations

from watchpost.monitoring.alarms import (
    Alarm,
    AlarmCreateOptions,
    AlarmRegistry,
    AlarmSink,
    InMemoryAlarmSink,
    TopicAction,
)
from watchpost.monitoring.attacher import (
    attach_alarm,
    broadcast_action,
    merge_options,
    route_actions,
)
from watchpost.monitoring.metrics import Metric, MetricSource
from watchpost.monitoring.profile import MonitoringProfile, ProfileState, duration_threshold

__all__ = [
    "Alarm",
    "AlarmCreateOptions",
    "AlarmRegistry",
    "AlarmSink",
    "InMemoryAlarmSink",
    "Metric",
    "MetricSource",
    "MonitoringProfile",
    "ProfileState",
    "TopicAction",
    "attach_alarm",
    "broadcast_action",
    "duration_threshold",
    "merge_options",
    "route_actions",
]
