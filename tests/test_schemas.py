"""Tests for declarative alarm schemas."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from watchpost.common.constants import AlarmStateKind, ComparisonOperator
from watchpost.common.errors import ConfigurationError
from watchpost.common.schemas import (
    AlarmDefinition,
    AlarmOptions,
    MetricOptions,
    as_targets,
    parse_declarations,
)


# --- Enum Tests ---


def test_alarm_state_kind_enum():
    assert AlarmStateKind.ALARM == "Alarm"
    assert AlarmStateKind.OK == "Ok"
    assert AlarmStateKind.INSUFFICIENT_DATA == "InsufficientData"


# --- MetricOptions Tests ---


def test_metric_options_all_optional():
    opts = MetricOptions()
    assert opts.statistic is None
    assert opts.period is None
    assert opts.dimensions is None


def test_metric_options_accepts_percentile():
    assert MetricOptions(statistic="p99").statistic == "p99"
    assert MetricOptions(statistic="p99.9").statistic == "p99.9"


def test_metric_options_rejects_unknown_statistic():
    with pytest.raises(ValueError):
        MetricOptions(statistic="Median")


def test_metric_options_period_from_seconds():
    assert MetricOptions(period=300).period == timedelta(minutes=5)


def test_metric_options_rejects_zero_period():
    with pytest.raises(ValueError):
        MetricOptions(period=timedelta(0))


# --- AlarmOptions Tests ---


def test_alarm_options_camel_case_keys():
    opts = AlarmOptions.model_validate({"threshold": 5, "evaluationPeriods": 2, "alarmDescription": "x"})
    assert opts.threshold == 5.0
    assert opts.evaluation_periods == 2
    assert opts.alarm_description == "x"


def test_alarm_options_rejects_zero_evaluation_periods():
    with pytest.raises(ValueError):
        AlarmOptions(evaluation_periods=0)


def test_alarm_options_rejects_nan_threshold():
    with pytest.raises(ValueError):
        AlarmOptions(threshold=float("nan"))


def test_alarm_options_comparison_operator():
    opts = AlarmOptions(comparison_operator="LessThanThreshold")
    assert opts.comparison_operator == ComparisonOperator.LESS_THAN_THRESHOLD


# --- AlarmDefinition Tests ---


def test_definition_defaults():
    definition = AlarmDefinition.parse(None)
    assert definition.metric_options == MetricOptions()
    assert definition.alarm_options == AlarmOptions()
    assert definition.actions is None


def test_definition_original_key_names():
    definition = AlarmDefinition.parse(
        {"metricOptions": {"statistic": "Sum"}, "createAlarmOptions": {"threshold": 3}}
    )
    assert definition.metric_options.statistic == "Sum"
    assert definition.alarm_options.threshold == 3.0


def test_definition_snake_case_keys():
    definition = AlarmDefinition.parse({"metric_options": None, "alarm_options": {"threshold": 1}})
    assert definition.metric_options == MetricOptions()
    assert definition.alarm_options.threshold == 1.0


def test_definition_actions_keyed_by_state():
    target_a, target_b = object(), object()
    definition = AlarmDefinition.parse({"actions": {"Alarm": [target_a], "Ok": target_b}})
    assert definition.actions == {
        AlarmStateKind.ALARM: (target_a,),
        AlarmStateKind.OK: (target_b,),
    }


def test_definition_actions_keep_target_identity():
    target = object()
    definition = AlarmDefinition.parse({"actions": {"InsufficientData": [target]}})
    assert definition.actions[AlarmStateKind.INSUFFICIENT_DATA][0] is target


def test_definition_empty_actions_allowed():
    definition = AlarmDefinition.parse({"actions": {}})
    assert definition.actions == {}


def test_definition_unknown_action_state_dropped(caplog):
    with caplog.at_level(logging.WARNING, logger="watchpost.common.schemas"):
        definition = AlarmDefinition.parse({"actions": {"Alarm": ["a"], "Paging": ["b"]}})
    assert list(definition.actions) == [AlarmStateKind.ALARM]
    assert "Paging" in caplog.text


def test_definition_actions_must_be_mapping():
    with pytest.raises(ConfigurationError):
        AlarmDefinition.parse({"actions": ["a"]})


def test_definition_invalid_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        AlarmDefinition.parse({"alarm_options": {"evaluation_periods": 0}})


def test_definition_parse_returns_same_instance():
    definition = AlarmDefinition()
    assert AlarmDefinition.parse(definition) is definition


# --- Helpers ---


def test_as_targets():
    target = object()
    assert as_targets(target) == (target,)
    assert as_targets("arn:topic") == ("arn:topic",)
    assert as_targets([1, 2]) == (1, 2)
    assert as_targets(()) == ()


def test_parse_declarations_empty():
    assert parse_declarations(None) == {}
    assert parse_declarations({}) == {}


def test_parse_declarations_names_failing_metric():
    with pytest.raises(ConfigurationError, match="Errors"):
        parse_declarations({"Errors": {"alarm_options": {"evaluation_periods": -1}}})


def test_parse_declarations_rejects_non_mapping():
    with pytest.raises(ConfigurationError):
        parse_declarations([("Errors", {})])
