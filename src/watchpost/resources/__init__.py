"""Resources that attach their declared alarms when defined."""

from __future__ import annotations

from watchpost.resources.base import MonitoredResource
from watchpost.resources.function import EventTarget, FunctionConfig, MonitoredFunction
from watchpost.resources.queue import MonitoredQueue
from watchpost.resources.scope import Scope
from watchpost.resources.table import MonitoredTable

__all__ = [
    "EventTarget",
    "FunctionConfig",
    "MonitoredFunction",
    "MonitoredQueue",
    "MonitoredResource",
    "MonitoredTable",
    "Scope",
]
