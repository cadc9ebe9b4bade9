"""Message queue that attaches its declared alarms."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from watchpost.common.config import WatchpostSettings
from watchpost.common.schemas import AlarmDefinition
from watchpost.monitoring.alarms import AlarmSink
from watchpost.resources.base import MonitoredResource
from watchpost.resources.scope import Scope


class MonitoredQueue(MonitoredResource):
    """Queue plus the alarms declared for it."""

    namespace = "AWS/SQS"
    metric_names = frozenset(
        {
            "ApproximateAgeOfOldestMessage",
            "ApproximateNumberOfMessagesDelayed",
            "ApproximateNumberOfMessagesNotVisible",
            "ApproximateNumberOfMessagesVisible",
            "NumberOfEmptyReceives",
            "NumberOfMessagesDeleted",
            "NumberOfMessagesReceived",
            "NumberOfMessagesSent",
            "SentMessageSize",
        }
    )
    default_statistic = "Maximum"

    def __init__(
        self,
        scope: Scope,
        resource_id: str,
        *,
        queue_name: str | None = None,
        fifo: bool = False,
        visibility_timeout: timedelta = timedelta(seconds=30),
        alarms: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None = None,
        sink: AlarmSink | None = None,
        settings: WatchpostSettings | None = None,
    ) -> None:
        name = queue_name or resource_id
        if fifo and not name.endswith(".fifo"):
            name = f"{name}.fifo"
        self.queue_name = name
        self.fifo = fifo
        self.visibility_timeout = visibility_timeout
        super().__init__(scope, resource_id, alarms=alarms, sink=sink, settings=settings)

    @property
    def dimensions(self) -> dict[str, str]:
        return {"QueueName": self.queue_name}


__all__ = ["MonitoredQueue"]
