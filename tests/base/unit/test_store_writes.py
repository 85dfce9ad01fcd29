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

from dataclasses import dataclass, field
from typing import Any

import pytest
from bson import ObjectId

from docstore import ChangeInfo, DocumentStore, StoreOptions
from docstore.exceptions import (
    DocumentNotFoundException,
    EmptyUpdateException,
    InvalidDocumentShapeException,
)

NOW_STRING = "2021-02-27 09:00:06"
OLD_STRING = "2020-01-01 00:00:00"


@dataclass
class Person:
    name: str
    age: int
    gender: str = field(default="", metadata={"omitempty": True})
    id: Any = field(default=None, metadata={"name": "_id", "omitempty": True})


class TestStoreInsert:
    @pytest.mark.describe("test of insert with automatic timestamps")
    def test_insert_timestamps(self, store: DocumentStore, raw_collection: Any) -> None:
        ids = store.insert({"name": "a", "gender": "1", "age": 12})
        assert len(ids) == 1
        assert isinstance(ids[0], ObjectId)
        stored = raw_collection.find_one({"_id": ids[0]})
        assert stored == {
            "_id": ids[0],
            "name": "a",
            "gender": "1",
            "age": 12,
            "create_time": NOW_STRING,
            "update_time": NOW_STRING,
        }

    @pytest.mark.describe("test of insert without automatic timestamps")
    def test_insert_no_timestamps(
        self, plain_store: DocumentStore, raw_collection: Any
    ) -> None:
        [doc_id] = plain_store.insert({"name": "a"})
        assert raw_collection.find_one({"_id": doc_id}) == {"_id": doc_id, "name": "a"}

    @pytest.mark.describe("test of insert keeping provided timestamps")
    def test_insert_keeps_create_time(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        [doc_id] = store.insert({"name": "a", "create_time": OLD_STRING})
        stored = raw_collection.find_one({"_id": doc_id})
        assert stored["create_time"] == OLD_STRING
        assert stored["update_time"] == NOW_STRING

    @pytest.mark.describe("test of insert of several documents, in order")
    def test_insert_many(self, store: DocumentStore, raw_collection: Any) -> None:
        ids = store.insert(
            {"name": "e", "age": 14},
            Person(name="f", age=13, gender="1"),
            {"name": "g", "age": 15},
        )
        assert len(ids) == 3
        assert len(set(ids)) == 3
        names = [raw_collection.find_one({"_id": doc_id})["name"] for doc_id in ids]
        assert names == ["e", "f", "g"]
        assert raw_collection.find_one({"_id": ids[1]})["gender"] == "1"

    @pytest.mark.describe("test of insert ignoring caller-provided ids")
    def test_insert_strips_id(self, store: DocumentStore, raw_collection: Any) -> None:
        source = {"_id": "x", "name": "a"}
        [doc_id] = store.insert(source)
        assert doc_id != "x"
        assert raw_collection.find_one({"_id": "x"}) is None
        assert raw_collection.count_documents({}) == 1
        # the caller's document is untouched
        assert source == {"_id": "x", "name": "a"}
        [person_id] = store.insert(Person(name="b", age=3, id="y"))
        assert person_id != "y"

    @pytest.mark.describe("test of insert failing on invalid documents with no write")
    def test_insert_invalid_batch(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        with pytest.raises(InvalidDocumentShapeException):
            store.insert({"name": "a"}, "not a document")
        assert raw_collection.count_documents({}) == 0

    @pytest.mark.describe("test of insert skipping None and empty documents")
    def test_insert_skips_empty(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        assert store.insert() == []
        assert store.insert(None, {}) == []
        assert raw_collection.count_documents({}) == 0
        ids = store.insert(None, {"name": "a"}, {})
        assert len(ids) == 1
        assert raw_collection.count_documents({}) == 1


class TestStoreReplace:
    @pytest.mark.describe("test of replace preserving the creation time")
    def test_replace_preserves_create_time(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        doc_id = raw_collection.insert_one(
            {"name": "a", "age": 12, "create_time": OLD_STRING}
        ).inserted_id
        store.replace({"name": "a"}, {"name": "a2", "gender": "1"})
        assert raw_collection.find_one({"_id": doc_id}) == {
            "_id": doc_id,
            "name": "a2",
            "gender": "1",
            "create_time": OLD_STRING,
            "update_time": NOW_STRING,
        }

    @pytest.mark.describe("test of replace on documents without creation time")
    def test_replace_no_old_create_time(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        doc_id = raw_collection.insert_one({"name": "a"}).inserted_id
        store.replace_by_id(doc_id, {"name": "b", "_id": "ignored"})
        stored = raw_collection.find_one({"_id": doc_id})
        assert stored["name"] == "b"
        assert stored["create_time"] == NOW_STRING
        assert raw_collection.find_one({"_id": "ignored"}) is None

    @pytest.mark.describe("test of replace with no matching document")
    def test_replace_not_found(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        raw_collection.insert_one({"name": "a"})
        with pytest.raises(DocumentNotFoundException) as exc_info:
            store.replace({"name": "zz"}, {"name": "b"})
        assert exc_info.value.operation == "replace"
        assert exc_info.value.selector == {"name": "zz"}
        assert raw_collection.count_documents({"name": "b"}) == 0
        with pytest.raises(DocumentNotFoundException):
            store.replace_by_id(ObjectId(), {"name": "b"})

    @pytest.mark.describe("test of replace with an empty document")
    def test_replace_empty(self, store: DocumentStore, raw_collection: Any) -> None:
        doc_id = raw_collection.insert_one(
            {"name": "a", "create_time": OLD_STRING}
        ).inserted_id
        store.replace_by_id(doc_id, {})
        assert raw_collection.find_one({"_id": doc_id}) == {
            "_id": doc_id,
            "create_time": OLD_STRING,
        }


class TestStoreModify:
    @pytest.mark.describe("test of modify setting fields and returning the document")
    def test_modify_set(self, store: DocumentStore, raw_collection: Any) -> None:
        doc_id = raw_collection.insert_one(
            {"name": "a", "age": 12, "create_time": OLD_STRING}
        ).inserted_id
        modified = store.modify({"name": "a"}, {"age": 13})
        assert modified == {
            "_id": doc_id,
            "name": "a",
            "age": 13,
            "create_time": OLD_STRING,
            "update_time": NOW_STRING,
        }
        assert raw_collection.find_one({"_id": doc_id}) == modified

    @pytest.mark.describe("test of modify removing fields")
    def test_modify_deletion(self, store: DocumentStore, raw_collection: Any) -> None:
        doc_id = raw_collection.insert_one(
            {"name": "a", "gender": "1", "update_time": OLD_STRING}
        ).inserted_id
        modified = store.modify_by_id(doc_id, {"gender": ""}, deletion=True)
        assert modified == {"_id": doc_id, "name": "a", "update_time": OLD_STRING}

    @pytest.mark.describe("test of modify with a typed result")
    def test_modify_document_type(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        doc_id = raw_collection.insert_one({"name": "a", "age": 12}).inserted_id
        person = store.modify(
            {"name": "a"}, Person(name="a", age=20, gender="2"), document_type=Person
        )
        assert isinstance(person, Person)
        assert person.id == doc_id
        assert person.age == 20
        assert person.gender == "2"

    @pytest.mark.describe("test of modify with an empty update")
    def test_modify_empty_update(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        raw_collection.insert_one({"name": "a"})
        for empty_update in [{}, None]:
            with pytest.raises(EmptyUpdateException):
                store.modify({"name": "a"}, empty_update)
        with pytest.raises(ValueError):
            store.modify_all({"name": "a"}, {}, deletion=True)
        assert raw_collection.find_one({"name": "a"}, {"_id": 0}) == {"name": "a"}

    @pytest.mark.describe("test of modify with no matching document")
    def test_modify_not_found(self, store: DocumentStore) -> None:
        with pytest.raises(DocumentNotFoundException) as exc_info:
            store.modify({"name": "zz"}, {"age": 1})
        assert exc_info.value.operation == "modify"

    @pytest.mark.describe("test of modify_all")
    def test_modify_all(self, store: DocumentStore, raw_collection: Any) -> None:
        raw_collection.insert_many(
            [
                {"name": "a", "gender": "1", "age": 12},
                {"name": "b", "gender": "1", "age": 13},
                {"name": "c", "gender": "1", "age": 20},
                {"name": "d", "gender": "2", "age": 13},
            ]
        )
        change_info = store.modify_all({"gender": "1"}, {"age": 20})
        assert isinstance(change_info, ChangeInfo)
        assert change_info.matched == 3
        assert change_info.modified == 3
        assert change_info.removed == 0
        assert raw_collection.count_documents({"age": 20}) == 3
        assert raw_collection.count_documents({"update_time": NOW_STRING}) == 3

        no_match = store.modify_all({"gender": "9"}, {"age": 1})
        assert no_match.matched == 0
        assert no_match.modified == 0

        removal = store.modify_all({"gender": "1"}, {"age": 0}, deletion=True)
        assert removal.matched == 3
        assert raw_collection.count_documents({"age": {"$exists": True}}) == 1


class TestStoreRemove:
    @pytest.mark.describe("test of remove and remove_by_id")
    def test_remove(self, store: DocumentStore, raw_collection: Any) -> None:
        raw_collection.insert_many([{"name": "a"}, {"name": "a"}, {"name": "b"}])
        store.remove({"name": "a"})
        assert raw_collection.count_documents({"name": "a"}) == 1
        b_id = raw_collection.find_one({"name": "b"})["_id"]
        store.remove_by_id(b_id)
        assert raw_collection.count_documents({"name": "b"}) == 0
        with pytest.raises(DocumentNotFoundException) as exc_info:
            store.remove({"name": "zz"})
        assert exc_info.value.operation == "remove"
        with pytest.raises(DocumentNotFoundException):
            store.remove_by_id(b_id)

    @pytest.mark.describe("test of remove_all")
    def test_remove_all(self, store: DocumentStore, raw_collection: Any) -> None:
        raw_collection.insert_many(
            [{"name": "a", "age": 1}, {"name": "b", "age": 1}, {"name": "c"}]
        )
        change_info = store.remove_all({"age": 1})
        assert change_info.removed == 2
        assert change_info.matched == 2
        assert change_info.modified == 0
        assert raw_collection.count_documents({}) == 1
        assert store.remove_all({"age": 1}).removed == 0


class TestStoreOptionsLayering:
    @pytest.mark.describe("test of per-store option overrides")
    def test_store_with_options(
        self, store: DocumentStore, raw_collection: Any
    ) -> None:
        no_auto = store.with_options(
            StoreOptions(update_time_auto=False, insert_time_auto=False)
        )
        assert no_auto != store
        assert no_auto.full_name == store.full_name
        [doc_id] = no_auto.insert({"name": "a"})
        assert raw_collection.find_one({"_id": doc_id}) == {"_id": doc_id, "name": "a"}

        native = store.with_options(StoreOptions(time_format=None))
        [native_id] = native.insert({"name": "b"})
        stored = raw_collection.find_one({"_id": native_id})
        assert stored["create_time"].year == 2021
