import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from datetime import date

import pytest

from template_catalog.application.use_cases.parameters import (
    build_initial_values,
    validate_parameter_values,
    validate_value,
)
from template_catalog.domain.entities import (
    MISSING_REQUIRED,
    OUT_OF_RANGE,
    TYPE_MISMATCH,
    ParameterCondition,
    ParameterDependency,
    ParameterPattern,
    TemplateParameter,
)


def _parameter(**overrides) -> TemplateParameter:
    payload = {
        "id": "length",
        "name": "length",
        "label": "Longitud",
        "type": "number",
        "required": False,
    }
    payload.update(overrides)
    return TemplateParameter(**payload)


@pytest.mark.parametrize("value", [1, 10, 5.5])
def test_number_bounds_are_inclusive(value):
    parameter = _parameter(min=1, max=10)

    assert validate_value(parameter, value).is_valid


@pytest.mark.parametrize("value", [0, 11, -3.2, 10**400, -(10**400)])
def test_number_outside_bounds_is_out_of_range(value):
    parameter = _parameter(min=1, max=10)

    outcome = validate_value(parameter, value)

    assert not outcome.is_valid
    assert outcome.code == OUT_OF_RANGE


@pytest.mark.parametrize("value", ["5", True, float("nan"), [1]])
def test_number_rejects_non_numeric_values(value):
    outcome = validate_value(_parameter(), value)

    assert outcome.code == TYPE_MISMATCH


@pytest.mark.parametrize("value", [None, ""])
def test_required_missing_value_fails_before_type_checks(value):
    parameter = _parameter(type="select", options=("a", "b"), required=True)

    outcome = validate_value(parameter, value)

    assert outcome.code == MISSING_REQUIRED


def test_optional_empty_value_is_accepted():
    assert validate_value(_parameter(required=False), None).is_valid
    assert validate_value(_parameter(type="date"), "").is_valid


def test_required_override_replaces_schema_flag():
    parameter = _parameter(required=False)

    assert validate_value(parameter, None, required=True).code == MISSING_REQUIRED
    assert validate_value(_parameter(required=True), None, required=False).is_valid


def test_select_value_must_be_an_option():
    parameter = _parameter(type="select", options=("21", "28"))

    assert validate_value(parameter, "28").is_valid
    assert validate_value(parameter, "35").code == TYPE_MISMATCH
    assert validate_value(parameter, 28).code == TYPE_MISMATCH


def test_text_required_whitespace_is_missing():
    parameter = _parameter(type="text", required=True)

    assert validate_value(parameter, "   ").code == MISSING_REQUIRED
    assert validate_value(parameter, " ok ").is_valid
    assert validate_value(parameter, 12).code == TYPE_MISMATCH


def test_text_pattern_uses_custom_message():
    parameter = _parameter(
        type="text",
        validation=ParameterPattern(pattern=r"PRJ-[0-9]{4}", message="Formato PRJ-0000"),
    )

    assert validate_value(parameter, "PRJ-0042").is_valid
    outcome = validate_value(parameter, "PRJ-42")
    assert outcome.code == TYPE_MISMATCH
    assert outcome.message == "Formato PRJ-0000"


def test_boolean_must_be_strict():
    parameter = _parameter(type="boolean")

    assert validate_value(parameter, False).is_valid
    assert validate_value(parameter, True).is_valid
    assert validate_value(parameter, 1).code == TYPE_MISMATCH
    assert validate_value(parameter, "true").code == TYPE_MISMATCH


@pytest.mark.parametrize("value", ["2024-02-29", "2024-03-15T10:30:00", date(2024, 1, 1)])
def test_date_accepts_calendar_dates(value):
    assert validate_value(_parameter(type="date"), value).is_valid


@pytest.mark.parametrize("value", ["2023-02-29", "15/03/2024", "mañana", 20240315])
def test_date_rejects_invalid_formats(value):
    assert validate_value(_parameter(type="date"), value).code == TYPE_MISMATCH


def test_unknown_type_is_reported_as_mismatch():
    assert validate_value(_parameter(type="matrix"), 3).code == TYPE_MISMATCH


def test_validate_parameter_values_skips_hidden_and_warns():
    parameters = [
        _parameter(id="mode", name="mode", type="select", options=("simple", "full")),
        _parameter(
            id="extra",
            name="extra",
            required=True,
            dependencies=(
                ParameterDependency(
                    depends_on="mode",
                    condition=ParameterCondition(operator="eq", value="simple"),
                    action="hide",
                ),
            ),
        ),
    ]

    validation = validate_parameter_values(parameters, {"mode": "simple", "extra": "x"})

    assert validation.is_valid
    assert "extra" in validation.warnings
    assert validation.states["extra"].visible is False


def test_validate_parameter_values_applies_resolved_requirement():
    parameters = [
        _parameter(id="hasLoad", name="hasLoad", type="boolean"),
        _parameter(
            id="load",
            name="load",
            dependencies=(
                ParameterDependency(
                    depends_on="hasLoad",
                    condition=ParameterCondition(operator="eq", value=True),
                    action="require",
                ),
            ),
        ),
        _parameter(
            id="notes",
            name="notes",
            type="text",
            required=True,
            dependencies=(
                ParameterDependency(
                    depends_on="hasLoad",
                    condition=ParameterCondition(operator="eq", value=True),
                    action="disable",
                ),
            ),
        ),
    ]

    validation = validate_parameter_values(parameters, {"hasLoad": True})

    assert not validation.is_valid
    assert validation.errors["load"].code == MISSING_REQUIRED
    assert "notes" not in validation.errors


def test_build_initial_values_uses_defaults_and_type_fallbacks():
    parameters = [
        _parameter(id="a", name="a", default_value=30),
        _parameter(id="b", name="b"),
        _parameter(id="c", name="c", type="boolean"),
        _parameter(id="d", name="d", type="select", options=("x",)),
        _parameter(id="e", name="e", type="date"),
    ]

    values = build_initial_values(parameters)

    assert values["a"] == 30
    assert values["b"] == 0
    assert values["c"] is False
    assert values["d"] == ""
    assert date.fromisoformat(values["e"])
