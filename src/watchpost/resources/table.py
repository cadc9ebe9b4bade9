"""Key-value table that attaches its declared alarms."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from watchpost.common.config import WatchpostSettings
from watchpost.common.schemas import AlarmDefinition
from watchpost.monitoring.alarms import AlarmSink
from watchpost.resources.base import MonitoredResource
from watchpost.resources.scope import Scope


class MonitoredTable(MonitoredResource):
    """Table plus the alarms declared for it."""

    namespace = "AWS/DynamoDB"
    metric_names = frozenset(
        {
            "ConditionalCheckFailedRequests",
            "ConsumedReadCapacityUnits",
            "ConsumedWriteCapacityUnits",
            "ReadThrottleEvents",
            "SuccessfulRequestLatency",
            "SystemErrors",
            "ThrottledRequests",
            "UserErrors",
            "WriteThrottleEvents",
        }
    )

    def __init__(
        self,
        scope: Scope,
        resource_id: str,
        *,
        partition_key: str,
        sort_key: str | None = None,
        table_name: str | None = None,
        billing_mode: Literal["PAY_PER_REQUEST", "PROVISIONED"] = "PAY_PER_REQUEST",
        alarms: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None = None,
        sink: AlarmSink | None = None,
        settings: WatchpostSettings | None = None,
    ) -> None:
        self.table_name = table_name or resource_id
        self.partition_key = partition_key
        self.sort_key = sort_key
        self.billing_mode = billing_mode
        super().__init__(scope, resource_id, alarms=alarms, sink=sink, settings=settings)

    @property
    def dimensions(self) -> dict[str, str]:
        return {"TableName": self.table_name}


__all__ = ["MonitoredTable"]
