import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from template_catalog.application.use_cases.parameters import (
    ensure_valid_parameters,
    find_dependency_cycle,
    parse_parameter,
    parse_template_record,
)
from template_catalog.domain.errors import InvalidSchemaError


def _parameters(*payloads):
    return tuple(
        parse_parameter(payload, position=index, template_id="tpl")
        for index, payload in enumerate(payloads)
    )


def _number(name: str, **extra) -> dict:
    payload = {"id": name, "name": name, "label": name, "type": "number"}
    payload.update(extra)
    return payload


def _depends(on: str, action: str = "hide") -> dict:
    return {"dependsOn": on, "condition": {"operator": "eq", "value": 1}, "action": action}


def test_valid_parameters_pass():
    parameters = _parameters(
        _number("a"),
        _number("b", dependencies=[_depends("a")]),
        {"name": "c", "type": "select", "options": ["x", "y"]},
    )

    ensure_valid_parameters(parameters, template_id="tpl")


def test_two_node_cycle_is_rejected():
    parameters = _parameters(
        _number("a", dependencies=[_depends("b")]),
        _number("b", dependencies=[_depends("a")]),
    )

    with pytest.raises(InvalidSchemaError) as excinfo:
        ensure_valid_parameters(parameters, template_id="tpl")

    assert "a -> b -> a" in str(excinfo.value)
    assert excinfo.value.template_id == "tpl"


def test_find_dependency_cycle_reports_longer_cycles():
    parameters = _parameters(
        _number("start"),
        _number("a", dependencies=[_depends("c")]),
        _number("b", dependencies=[_depends("a")]),
        _number("c", dependencies=[_depends("b"), _depends("start")]),
    )

    assert find_dependency_cycle(parameters) == ["a", "c", "b", "a"]
    assert find_dependency_cycle(parameters[:1]) is None


def test_self_dependency_is_rejected():
    parameters = _parameters(_number("a", dependencies=[_depends("a")]))

    with pytest.raises(InvalidSchemaError, match="sí mismo"):
        ensure_valid_parameters(parameters)


def test_unknown_dependency_reference_is_rejected():
    parameters = _parameters(_number("a", dependencies=[_depends("ghost")]))

    with pytest.raises(InvalidSchemaError, match="ghost"):
        ensure_valid_parameters(parameters)


def test_select_without_options_is_rejected():
    parameters = _parameters({"name": "grade", "type": "select", "options": []})

    with pytest.raises(InvalidSchemaError, match="opciones"):
        ensure_valid_parameters(parameters)


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "1width", "type": "number"},
        {"name": "beam width", "type": "number"},
        {"name": "width", "type": "matrix"},
        {"name": "width", "type": "number", "min": 10, "max": 1},
        {"name": "code", "type": "text", "validation": {"pattern": "[unclosed"}},
        {"name": "b", "type": "number", "dependencies": [_depends("a", action="explode")]},
    ],
)
def test_malformed_definitions_are_rejected(payload):
    parameters = _parameters(_number("a"), payload)

    with pytest.raises(InvalidSchemaError):
        ensure_valid_parameters(parameters)


@pytest.mark.parametrize(
    "payload",
    [
        _number("width", min=1, max=10, defaultValue="abc"),
        _number("width", min=1, max=10, defaultValue=50),
        {"name": "grade", "type": "select", "options": ["21", "28"], "defaultValue": "35"},
        {"name": "seismic", "type": "boolean", "defaultValue": "no"},
        {"name": "code", "type": "text", "validation": {"pattern": "PRJ-[0-9]{4}"}, "defaultValue": "X"},
    ],
)
def test_invalid_default_values_are_rejected(payload):
    with pytest.raises(InvalidSchemaError, match="por defecto"):
        ensure_valid_parameters(_parameters(payload), template_id="tpl")


def test_valid_and_empty_default_values_pass():
    parameters = _parameters(
        _number("width", min=1, max=10, defaultValue=10),
        {"name": "grade", "type": "select", "options": ["21", "28"], "defaultValue": "28"},
        {"name": "notes", "type": "text", "required": True, "defaultValue": ""},
    )

    ensure_valid_parameters(parameters, template_id="tpl")


def test_unknown_operator_is_rejected():
    dependency = {"dependsOn": "a", "condition": {"operator": "like", "value": 1}, "action": "hide"}
    parameters = _parameters(_number("a"), _number("b", dependencies=[dependency]))

    with pytest.raises(InvalidSchemaError, match="like"):
        ensure_valid_parameters(parameters)


def test_duplicate_names_are_rejected():
    parameters = _parameters(_number("a"), {"id": "other", "name": "a", "type": "number"})

    with pytest.raises(InvalidSchemaError, match="duplicado"):
        ensure_valid_parameters(parameters)


def test_parse_template_record_accepts_legacy_keys_and_derives_flags():
    template = parse_template_record(
        {
            "id": "legacy",
            "name": "Plantilla heredada",
            "type": "structural",
            "averageRating": 4.5,
            "usageCount": 120,
            "isVerified": True,
            "updatedAt": "2024-03-15T10:00:00Z",
            "targetProfession": "civil_engineer",
        }
    )

    assert template.category == "structural"
    assert template.difficulty == "advanced"
    assert template.rating == 4.5
    assert template.verified is True
    assert template.popular is True
    assert template.trending is True
    assert template.profession == frozenset({"civil_engineer"})
    assert template.last_updated is not None


def test_parse_template_record_keeps_explicit_flags():
    template = parse_template_record(
        {
            "id": "explicit",
            "name": "Plantilla",
            "category": "electrical",
            "rating": 4.9,
            "usageCount": 500,
            "trending": False,
            "popular": False,
        }
    )

    assert template.trending is False
    assert template.popular is False
    assert template.difficulty == "intermediate"
    assert template.parameters == ()


@pytest.mark.parametrize(
    "record",
    [
        {"name": "Sin id", "category": "custom"},
        {"id": "x", "name": "  ", "category": "custom"},
        {"id": "x", "name": "Sin categoría"},
        {"id": "x", "name": "Calificación", "category": "custom", "rating": 7},
        {"id": "x", "name": "Usos", "category": "custom", "usageCount": -1},
        {"id": "x", "name": "Dificultad", "category": "custom", "difficulty": "expert"},
        {"id": "x", "name": "Parámetros", "category": "custom", "parameters": "a,b"},
    ],
)
def test_parse_template_record_rejects_broken_records(record):
    with pytest.raises(InvalidSchemaError):
        parse_template_record(record)
