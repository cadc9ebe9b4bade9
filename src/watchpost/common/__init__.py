"""Common utilities and schemas for Watchpost."""

from watchpost.common.config import WatchpostSettings, configure_logging
from watchpost.common.constants import (
    ALARM_ID_SUFFIX,
    AlarmStateKind,
    ComparisonOperator,
    TreatMissingData,
)
from watchpost.common.errors import CollaboratorError, ConfigurationError, WatchpostError
from watchpost.common.schemas import AlarmDefinition, AlarmOptions, MetricOptions, parse_declarations

__all__ = [
    "ALARM_ID_SUFFIX",
    "AlarmStateKind",
    "ComparisonOperator",
    "TreatMissingData",
    "WatchpostSettings",
    "configure_logging",
    "WatchpostError",
    "ConfigurationError",
    "CollaboratorError",
    "MetricOptions",
    "AlarmOptions",
    "AlarmDefinition",
    "parse_declarations",
]
