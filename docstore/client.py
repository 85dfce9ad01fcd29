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

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import pymongo
from bson.errors import BSONError
from pymongo.collection import Collection as DriverCollection
from pymongo.errors import PyMongoError

from docstore.exceptions import (
    OperationCancelledException,
    OperationContext,
    to_store_exception,
)
from docstore.settings.defaults import DEFAULT_MONGO_URI
from docstore.utils.store_options import (
    FullStoreOptions,
    StoreOptions,
    defaultStoreOptions,
)
from docstore.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from docstore.data.store import DocumentStore


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreBinding:
    """
    The immutable identity of a document store: a collection in a database,
    reached through a client. Created once, never mutated.
    """

    database: str
    collection: str
    client: StoreClient

    @property
    def full_name(self) -> str:
        return f"{self.database}.{self.collection}"


class StoreClient:
    """
    The entry point to a MongoDB deployment. A StoreClient owns the driver
    connection pool and a complete set of store options, which the stores it
    spawns inherit (and can override).

    Args:
        uri: a MongoDB connection string. Ignored if `mongo_client` is passed.
            Defaults to a local server.
        mongo_client: an already-created pymongo-compatible client. When given,
            the StoreClient does not close it on `close()`.
        options: a specification, complete or partial, of the store options
            to override the system defaults.
        **client_kwargs: additional keyword arguments for `pymongo.MongoClient`.

    Example:
        >>> from docstore import StoreClient, StoreOptions
        >>> client = StoreClient(
        ...     "mongodb://localhost:27017",
        ...     options=StoreOptions(update_time_auto=True, insert_time_auto=True),
        ... )
        >>> users = client.get_store("app", "users")
        >>> users.insert({"name": "a", "age": 12})
        [ObjectId('...')]
    """

    def __init__(
        self,
        uri: str | None = None,
        *,
        mongo_client: Any = None,
        options: StoreOptions | UnsetType = _UNSET,
        **client_kwargs: Any,
    ) -> None:
        self.options = defaultStoreOptions().with_override(options)
        if mongo_client is not None:
            self._mongo_client = mongo_client
            self._owns_mongo_client = False
        else:
            self._mongo_client = pymongo.MongoClient(
                uri or DEFAULT_MONGO_URI, **client_kwargs
            )
            self._owns_mongo_client = True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(options={self.options})"

    def __enter__(self) -> StoreClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the driver resources, if they were created by this client."""
        if self._owns_mongo_client:
            self._mongo_client.close()

    def get_configuration(self) -> FullStoreOptions:
        """The store options in effect at the client level."""
        return self.options

    def get_session(self) -> Any:
        """The underlying driver client (a `pymongo.MongoClient` or compatible)."""
        return self._mongo_client

    def get_store(
        self,
        database: str,
        collection: str,
        *,
        options: StoreOptions | UnsetType = _UNSET,
    ) -> DocumentStore:
        """
        Bind a DocumentStore to a collection. No request is issued.

        Args:
            database: the database name.
            collection: the collection name.
            options: store options overriding those of the client, for this
                store only.
        """

        # lazy-import here to avoid circular import issues
        from docstore.data.store import DocumentStore

        return DocumentStore(self, database, collection, options=options)

    def execute(
        self,
        context: OperationContext,
        binding: StoreBinding,
        unit_of_work: Callable[[DriverCollection[Any]], T],
        *,
        operation: str,
        selector: Any = None,
        is_write: bool = False,
    ) -> T:
        """
        Run a unit of work against the collection of a binding, within the
        cancellation/deadline scope of `context`.

        The remaining time of the context is handed to the driver, which aborts
        the call if the deadline passes. Driver errors are re-raised wrapped with
        the operation name and the selector (never retried). A cancellation
        detected once a read returns discards its result. A write that returned
        has been committed: its result is handed back, and the cancellation
        surfaces at the next round trip on the same context.

        Args:
            context: the OperationContext of the ongoing operation.
            binding: the StoreBinding identifying the target collection.
            unit_of_work: a callable receiving the driver collection.
            operation: the operation name, for errors and logging.
            selector: the selector involved, for errors.
            is_write: whether the unit of work writes to the database.

        Returns:
            whatever `unit_of_work` returns.
        """

        remaining_s = context.remaining_timeout(operation)
        collection = self._mongo_client[binding.database][binding.collection]
        try:
            with pymongo.timeout(remaining_s):
                result = unit_of_work(collection)
        except (PyMongoError, BSONError) as exc:
            if context.cancelled:
                raise OperationCancelledException(
                    f"Operation {operation} was cancelled.",
                    operation=operation,
                ) from exc
            raise to_store_exception(
                exc,
                operation=operation,
                selector=selector,
                timeout_ms=context.timeout_ms,
            ) from exc
        if not is_write:
            context.check_cancelled(operation)
        return result
