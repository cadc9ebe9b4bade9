"""Pydantic v2 schemas for declarative alarm configuration.

Declarations are plain structured data keyed by metric name. Both
snake_case and camelCase keys are accepted so that configuration written
for the provisioning library can be passed through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from watchpost.common.constants import AlarmStateKind, ComparisonOperator, TreatMissingData
from watchpost.common.errors import ConfigurationError

logger = logging.getLogger(__name__)

STATISTIC_PATTERN = r"^(Sum|Average|Maximum|Minimum|SampleCount|p\d{1,2}(\.\d+)?|p100)$"


def as_targets(targets: Any) -> tuple[Any, ...]:
    """Normalize one action target or a sequence of them to a tuple."""
    if isinstance(targets, (str, bytes)) or not isinstance(targets, Sequence):
        return (targets,)
    return tuple(targets)


class MetricOptions(BaseModel):
    """Partial aggregation settings for a metric."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    statistic: str | None = Field(default=None, pattern=STATISTIC_PATTERN)
    period: timedelta | None = None
    dimensions: dict[str, str] | None = None

    @field_validator("period")
    @classmethod
    def period_positive(cls, value: timedelta | None) -> timedelta | None:
        if value is not None and value <= timedelta(0):
            raise ValueError("period must be positive")
        return value


class AlarmOptions(BaseModel):
    """Partial alarm settings; anything left out is filled by defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    threshold: float | None = Field(default=None, allow_inf_nan=False)
    evaluation_periods: int | None = Field(default=None, ge=1)
    datapoints_to_alarm: int | None = Field(default=None, ge=1)
    alarm_description: str | None = None
    comparison_operator: ComparisonOperator | None = None
    treat_missing_data: TreatMissingData | None = None

    @classmethod
    def parse(cls, value: AlarmOptions | Mapping[str, Any] | None, metric_name: str) -> AlarmOptions:
        """Build alarm options for one metric, failing with ConfigurationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(value or {})
        except ValidationError as exc:
            raise ConfigurationError(f"invalid alarm options for {metric_name}: {exc}") from exc


class AlarmDefinition(BaseModel):
    """Declarative intent for one alarm on one metric."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    metric_options: MetricOptions = Field(default_factory=MetricOptions)
    alarm_options: AlarmOptions = Field(
        default_factory=AlarmOptions,
        validation_alias=AliasChoices("alarm_options", "alarmOptions", "createAlarmOptions"),
    )
    actions: dict[AlarmStateKind, tuple[Any, ...]] | None = None

    @field_validator("metric_options", "alarm_options", mode="before")
    @classmethod
    def none_means_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("actions", mode="before")
    @classmethod
    def normalize_actions(cls, value: Any) -> Any:
        """Key actions by state kind; a lone target becomes a 1-tuple."""
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise ValueError("actions must map an alarm state to its targets")

        normalized: dict[AlarmStateKind, tuple[Any, ...]] = {}
        for kind, targets in value.items():
            try:
                state = AlarmStateKind(kind)
            except ValueError:
                logger.warning("Ignoring actions for unknown alarm state %r", kind)
                continue
            normalized[state] = as_targets(targets)
        return normalized

    @classmethod
    def parse(cls, value: AlarmDefinition | Mapping[str, Any] | None) -> AlarmDefinition:
        """Build a definition from a mapping, failing with ConfigurationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(value or {})
        except ValidationError as exc:
            raise ConfigurationError(f"invalid alarm definition: {exc}") from exc


def parse_declarations(
    declarations: Mapping[str, AlarmDefinition | Mapping[str, Any]] | None,
) -> dict[str, AlarmDefinition]:
    """Parse a metric-name keyed mapping of alarm declarations."""
    if not declarations:
        return {}
    if not isinstance(declarations, Mapping):
        raise ConfigurationError("alarm declarations must be a mapping keyed by metric name")

    parsed: dict[str, AlarmDefinition] = {}
    for metric_name, definition in declarations.items():
        try:
            parsed[metric_name] = AlarmDefinition.parse(definition)
        except ConfigurationError as exc:
            raise ConfigurationError(f"{metric_name}: {exc}") from exc
    return parsed


__all__ = [
    "MetricOptions",
    "AlarmOptions",
    "AlarmDefinition",
    "parse_declarations",
    "as_targets",
    "STATISTIC_PATTERN",
]
