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

"""
Main conftest for shared fixtures.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import mongomock
import pytest

from docstore import DocumentStore, StoreClient, StoreOptions

TEST_DATABASE = "docstore_test"
TEST_COLLECTION = "people"

FIXED_NOW = datetime.datetime(2021, 2, 27, 9, 0, 6, tzinfo=datetime.timezone.utc)
FIXED_NOW_STRING = "2021-02-27 09:00:06"


def fixed_clock() -> datetime.datetime:
    return FIXED_NOW


@pytest.fixture
def mongo_client() -> Iterator[mongomock.MongoClient]:
    client: mongomock.MongoClient = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def store_client(mongo_client: mongomock.MongoClient) -> StoreClient:
    return StoreClient(
        mongo_client=mongo_client,
        options=StoreOptions(update_time_auto=True, insert_time_auto=True),
    )


@pytest.fixture
def store(store_client: StoreClient) -> DocumentStore:
    """A store with both automatic timestamps on and a frozen clock."""
    return DocumentStore(
        store_client,
        TEST_DATABASE,
        TEST_COLLECTION,
        clock=fixed_clock,
    )


@pytest.fixture
def plain_store(mongo_client: mongomock.MongoClient) -> DocumentStore:
    """A store with the default options (no automatic timestamps)."""
    return StoreClient(mongo_client=mongo_client).get_store(
        TEST_DATABASE, TEST_COLLECTION
    )


@pytest.fixture
def raw_collection(mongo_client: mongomock.MongoClient) -> Any:
    """Direct access to the collection behind the `store` fixtures."""
    return mongo_client[TEST_DATABASE][TEST_COLLECTION]


@pytest.fixture
def mock_collection() -> MagicMock:
    """A stand-in driver collection, to inspect the sequence of driver calls."""
    return MagicMock(name="driver_collection")


@pytest.fixture
def mock_store(mock_collection: MagicMock) -> DocumentStore:
    mock_mongo_client = MagicMock(name="mongo_client")
    mock_mongo_client.__getitem__.return_value.__getitem__.return_value = (
        mock_collection
    )
    return DocumentStore(
        StoreClient(
            mongo_client=mock_mongo_client,
            options=StoreOptions(update_time_auto=True, insert_time_auto=True),
        ),
        TEST_DATABASE,
        TEST_COLLECTION,
        clock=fixed_clock,
    )
