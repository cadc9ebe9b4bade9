"""Constants and enums for Watchpost."""

from enum import StrEnum
from typing import Final


class AlarmStateKind(StrEnum):
    """Alarm states an action can be routed to."""

    ALARM = "Alarm"
    OK = "Ok"
    INSUFFICIENT_DATA = "InsufficientData"


class ComparisonOperator(StrEnum):
    """How the metric is compared against the threshold."""

    GREATER_THAN_OR_EQUAL_TO_THRESHOLD = "GreaterThanOrEqualToThreshold"
    GREATER_THAN_THRESHOLD = "GreaterThanThreshold"
    LESS_THAN_THRESHOLD = "LessThanThreshold"
    LESS_THAN_OR_EQUAL_TO_THRESHOLD = "LessThanOrEqualToThreshold"


class TreatMissingData(StrEnum):
    """How missing datapoints are evaluated."""

    BREACHING = "breaching"
    NOT_BREACHING = "notBreaching"
    IGNORE = "ignore"
    MISSING = "missing"


ALARM_ID_SUFFIX: Final[str] = "Alarm"

DEFAULT_EVALUATION_PERIODS: Final[int] = 3
DEFAULT_TIMEOUT_PERCENT: Final[float] = 80.0

# Statistic applied when a declaration leaves it out; the period comes from settings
STATIC_METRIC_STATISTICS: Final[dict[str, str]] = {
    "Errors": "Sum",
    "Throttles": "Sum",
    "Invocations": "Sum",
    "Duration": "p99",
}

__all__ = [
    "AlarmStateKind",
    "ComparisonOperator",
    "TreatMissingData",
    "ALARM_ID_SUFFIX",
    "DEFAULT_EVALUATION_PERIODS",
    "DEFAULT_TIMEOUT_PERCENT",
    "STATIC_METRIC_STATISTICS",
]
