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
Fixtures for the tests against a real MongoDB. The connection string is read
from the environment (or a .env file) as DOCSTORE_MONGO_URI; without it, all
tests in this directory are skipped.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from dotenv import load_dotenv

from docstore import DocumentStore, StoreClient, StoreOptions

load_dotenv()


DOCSTORE_MONGO_URI = os.environ.get("DOCSTORE_MONGO_URI")
DOCSTORE_TEST_DATABASE = os.environ.get("DOCSTORE_TEST_DATABASE", "docstore_it")
INTEGRATION_COLLECTION = "it_people"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if DOCSTORE_MONGO_URI:
        return
    skip_integration = pytest.mark.skip(reason="DOCSTORE_MONGO_URI is not set")
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(skip_integration)


@pytest.fixture(scope="session")
def live_client() -> Iterator[StoreClient]:
    assert DOCSTORE_MONGO_URI is not None
    client = StoreClient(
        DOCSTORE_MONGO_URI,
        options=StoreOptions(update_time_auto=True, insert_time_auto=True),
        serverSelectionTimeoutMS=5000,
    )
    yield client
    client.close()


@pytest.fixture
def live_store(live_client: StoreClient) -> Iterator[DocumentStore]:
    store = live_client.get_store(DOCSTORE_TEST_DATABASE, INTEGRATION_COLLECTION)
    store.do_with_context(lambda coll: coll.delete_many({}))
    yield store
    store.do_with_context(lambda coll: coll.drop())
