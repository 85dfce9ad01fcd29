# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Mapping

import pytest

from docstore.data.utils.document_converters import (
    TypedRecord,
    materialize_document,
    normalize_document,
    strip_identifier,
)
from docstore.exceptions import InvalidDocumentShapeException


@dataclass
class Address:
    city: str
    zip_code: str = field(metadata={"name": "zip"})


@dataclass
class Person:
    name: str
    age: int
    gender: str = field(default="", metadata={"omitempty": True})
    address: Address | None = None
    tags: list[str] = field(default_factory=list)
    id: Any = field(default=None, metadata={"name": "_id", "omitempty": True})


class Badge:
    def __init__(self, label: str) -> None:
        self.label = label

    def to_mapping(self) -> Mapping[str, Any]:
        return {"label": self.label, "kind": "badge"}

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> Badge:
        return cls(document["label"])


class BrokenRecord:
    def to_mapping(self) -> Any:
        return ["not", "a", "mapping"]


class TestDocumentConverters:
    @pytest.mark.describe("test of normalization of None and empty documents")
    def test_normalize_none_and_empty(self) -> None:
        assert normalize_document(None) is None
        assert normalize_document({}) == {}

    @pytest.mark.describe("test of normalization of mappings, copied and ordered")
    def test_normalize_mapping(self) -> None:
        source = OrderedDict([("b", 1), ("a", {"x": 2})])
        normalized = normalize_document(source)
        assert normalized == {"b": 1, "a": {"x": 2}}
        assert isinstance(normalized, dict)
        assert list(normalized.keys()) == ["b", "a"]
        assert normalized is not source
        normalized["c"] = 3
        assert "c" not in source

    @pytest.mark.describe("test of normalization of dataclasses with declared names")
    def test_normalize_dataclass(self) -> None:
        person = Person(
            name="a",
            age=12,
            address=Address(city="Turin", zip_code="10100"),
            tags=["x", "y"],
        )
        assert normalize_document(person) == {
            "name": "a",
            "age": 12,
            "address": {"city": "Turin", "zip": "10100"},
            "tags": ["x", "y"],
        }
        person_g = Person(name="b", age=13, gender="1", id="the-id")
        normalized_g = normalize_document(person_g)
        assert normalized_g is not None
        assert normalized_g["gender"] == "1"
        assert normalized_g["_id"] == "the-id"
        assert normalized_g["address"] is None

    @pytest.mark.describe("test of normalization of records with to_mapping")
    def test_normalize_typed_record(self) -> None:
        badge = Badge("gold")
        assert isinstance(badge, TypedRecord)
        assert normalize_document(badge) == {"label": "gold", "kind": "badge"}

    @pytest.mark.describe("test of normalization failures for invalid shapes")
    def test_normalize_invalid_shapes(self) -> None:
        for bad_value in ["a string", 123, 4.5, ["a", "list"], ("t",), Person]:
            with pytest.raises(InvalidDocumentShapeException) as exc_info:
                normalize_document(bad_value)
            assert exc_info.value.value_type == type(bad_value).__name__
        with pytest.raises(InvalidDocumentShapeException):
            normalize_document(BrokenRecord())
        # also a TypeError, for callers not knowing about this layer:
        with pytest.raises(TypeError):
            normalize_document(42)

    @pytest.mark.describe("test of materialization of documents as types")
    def test_materialize_document(self) -> None:
        document = {"_id": "x", "name": "a", "age": 12, "extra": True}
        assert materialize_document(document, None) is document
        person = materialize_document(document, Person)
        assert isinstance(person, Person)
        assert person.id == "x"
        assert person.name == "a"
        assert person.age == 12
        badge = materialize_document({"label": "silver"}, Badge)
        assert isinstance(badge, Badge)
        assert badge.label == "silver"
        assert materialize_document({"a": 1}, dict) == {"a": 1}
        assert materialize_document({"a": 1}, lambda doc: doc["a"]) == 1

    @pytest.mark.describe("test of identifier stripping")
    def test_strip_identifier(self) -> None:
        document = {"_id": "x", "name": "a"}
        assert strip_identifier(document, "_id") == {"name": "a"}
        assert strip_identifier({"name": "a"}, "_id") == {"name": "a"}
        assert strip_identifier(None, "_id") is None
        assert strip_identifier({}, "_id") == {}
