"""Unit tests for document -> record mapping."""

from __future__ import annotations

import logging
import math

import pytest

from orm_es_connector.model_mapper import ModelMapper, to_record
from orm_es_connector.schema import FieldType, ModelRegistry


@pytest.fixture
def registry():
    registry = ModelRegistry()
    registry.define("Person", {"name": str, "tags": [str], "age": int})
    return registry


@pytest.fixture
def mapper(registry):
    return ModelMapper(registry)


def test_keeps_declared_present_fields_only() -> None:
    schema = {"name": FieldType.STRING, "tags": FieldType.ARRAY}
    source = {"name": "Bob", "tags": [], "other": "ignored"}
    assert to_record(schema, source) == {"name": "Bob", "tags": []}


def test_absent_and_falsy_fields_are_omitted() -> None:
    schema = {
        "name": FieldType.STRING,
        "age": FieldType.NUMBER,
        "nick": FieldType.STRING,
    }
    record = to_record(schema, {"name": "Bob", "age": 0, "nick": None})
    assert record == {"name": "Bob"}
    assert "age" not in record


def test_none_source_is_not_found() -> None:
    assert to_record({"name": FieldType.STRING}, None) is None


def test_malformed_number_becomes_nan() -> None:
    record = to_record({"count": FieldType.NUMBER}, {"count": "abc"})
    assert record is not None
    assert math.isnan(record["count"])


def test_unreadable_source_degrades_to_none(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="orm_es_connector.model_mapper"):
        assert to_record({"name": FieldType.STRING}, ["not", "a", "mapping"]) is None
    assert "Unreadable source document" in caplog.text


def test_each_call_builds_a_fresh_record() -> None:
    schema = {"name": FieldType.STRING}
    source = {"name": "Bob"}
    first = to_record(schema, source)
    second = to_record(schema, source)
    assert first == second
    assert first is not second


class TestModelMapper:
    def test_to_record_uses_registered_schema(self, mapper) -> None:
        record = mapper.to_record("Person", {"name": "Ann", "age": "41", "x": 1})
        assert record == {"name": "Ann", "age": 41}

    def test_unknown_model_degrades_to_none(self, mapper) -> None:
        assert mapper.to_record("Robot", {"name": "R2"}) is None

    def test_from_response_reads_source(self, mapper) -> None:
        response = {"_id": "1", "found": True, "_source": {"name": "Ann", "tags": "x"}}
        record = mapper.from_response("Person", response)
        assert record == {"name": "Ann", "tags": ["x"]}

    def test_from_response_not_found(self, mapper) -> None:
        assert mapper.from_response("Person", {"_id": "1", "found": False}) is None
        assert mapper.from_response("Person", None) is None
        assert mapper.from_response("Person", {}) is None

    def test_from_response_without_source(self, mapper) -> None:
        assert mapper.from_response("Person", {"_id": "1", "found": True}) is None

    def test_from_hits_keeps_hit_order(self, mapper) -> None:
        response = {
            "hits": {
                "hits": [
                    {"_source": {"name": "Ann"}},
                    {"_source": {"name": "Bob"}},
                ]
            }
        }
        records = mapper.from_hits("Person", response)
        assert records == [{"name": "Ann"}, {"name": "Bob"}]

    def test_from_hits_empty_response(self, mapper) -> None:
        assert mapper.from_hits("Person", {}) == []
