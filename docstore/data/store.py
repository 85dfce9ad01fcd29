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
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from bson import ObjectId
from pymongo import ReplaceOne

from docstore.client import StoreBinding, StoreClient
from docstore.constants import (
    DefaultDocumentType,
    FilterType,
    PickerType,
    PipelineType,
    SortType,
    UpdateOperator,
    normalize_optional_picker,
    normalize_optional_sort,
)
from docstore.data.utils.document_converters import (
    materialize_document,
    normalize_document,
    strip_identifier,
)
from docstore.data.utils.timestamps import ClockType, apply_timestamps
from docstore.exceptions import (
    DocumentNotFoundException,
    EmptyUpdateException,
    InvalidIdentifierException,
    OperationContext,
)
from docstore.info import IndexInfo
from docstore.results import ChangeInfo
from docstore.settings.defaults import CREATE_TIME_FIELD, DEFAULT_ID_FIELD
from docstore.utils.meta import deprecated_alias
from docstore.utils.store_options import FullStoreOptions, StoreOptions
from docstore.utils.unset import _UNSET, UnsetType

if TYPE_CHECKING:
    from pymongo.collection import Collection as DriverCollection


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentStore:
    """
    A document store bound to one collection of one database, the object
    application code uses to read and write documents.

    Documents can be passed as mappings, dataclass instances or objects with a
    `to_mapping` method (see `docstore.data.utils.document_converters`).
    Depending on the store options, writes get their "create_time" and
    "update_time" fields filled automatically; the identity field "_id" is
    always assigned by the database on insert and replace.

    This class is not meant for direct instantiation by the user, rather
    it is obtained by invoking the `get_store` method of a StoreClient, wherefrom
    the DocumentStore inherits its options.

    Args:
        client: the StoreClient executing the driver calls.
        database: the database name.
        collection: the collection name.
        options: store options overriding those of the client.
        clock: a callable returning the current datetime, used for the
            automatic timestamps. Defaults to the system clock.

    Example:
        >>> from docstore import StoreClient, StoreOptions
        >>> client = StoreClient(options=StoreOptions(insert_time_auto=True))
        >>> people = client.get_store("registry", "people")
        >>> people.insert({"name": "a", "gender": "1", "age": 12})
        [ObjectId('603a081694ea2e906792a8f1')]
        >>> people.find_one({"name": "a"}, ["name", "create_time"])
        {'_id': ObjectId('603a081694ea2e906792a8f1'), 'name': 'a', 'create_time': '2021-02-27 09:00:06'}

    Note:
        None of the operations is transactional. Those issuing two driver calls
        (`replace`, `replace_all`, `modify`) do so in sequence, without isolation:
        a concurrent write falling between the two calls goes undetected.
    """

    def __init__(
        self,
        client: StoreClient,
        database: str,
        collection: str,
        *,
        options: StoreOptions | UnsetType = _UNSET,
        clock: ClockType | None = None,
    ) -> None:
        if not database:
            raise ValueError("Attempted to create DocumentStore with empty 'database'.")
        if not collection:
            raise ValueError(
                "Attempted to create DocumentStore with empty 'collection'."
            )
        self._binding = StoreBinding(
            database=database, collection=collection, client=client
        )
        self._options = client.get_configuration().with_override(options)
        self._clock = clock

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(database="{self.database}", '
            f'collection="{self.collection}", options={self.options})'
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, DocumentStore):
            return all(
                [
                    self._binding == other._binding,
                    self._options == other._options,
                ]
            )
        else:
            return False

    def __hash__(self) -> int:
        return hash(self._binding)

    @property
    def binding(self) -> StoreBinding:
        return self._binding

    @property
    def database(self) -> str:
        return self._binding.database

    @property
    def collection(self) -> str:
        return self._binding.collection

    @property
    def client(self) -> StoreClient:
        return self._binding.client

    @property
    def full_name(self) -> str:
        """The fully-qualified collection name, "database.collection"."""
        return self._binding.full_name

    @property
    def options(self) -> FullStoreOptions:
        return self._options

    def with_options(self, options: StoreOptions) -> DocumentStore:
        """
        Create a clone of this store bound to the same collection, with some
        of the options overridden.

        Example:
            >>> audited = people.with_options(StoreOptions(update_time_auto=True))
        """

        return DocumentStore(
            self.client,
            self.database,
            self.collection,
            options=self._options.with_override(options),
            clock=self._clock,
        )

    def _operation_context(
        self,
        context: OperationContext | None,
        timeout_ms: int | None,
    ) -> OperationContext:
        if context is not None:
            if timeout_ms is not None:
                raise ValueError(
                    "Parameters `context` and `timeout_ms` cannot be passed "
                    "at the same time."
                )
            return context
        if timeout_ms is not None:
            return OperationContext(timeout_ms, timeout_label="timeout_ms")
        return OperationContext(
            self._options.timeout_ms, timeout_label="options.timeout_ms"
        )

    def _execute(
        self,
        context: OperationContext,
        unit_of_work: Callable[[DriverCollection[Any]], T],
        *,
        operation: str,
        command: str,
        selector: Any = None,
        is_write: bool = False,
    ) -> T:
        logger.info(f"{command} for {operation} on '{self.full_name}'")
        result = self.client.execute(
            context,
            self._binding,
            unit_of_work,
            operation=operation,
            selector=selector,
            is_write=is_write,
        )
        logger.info(f"finished {command} for {operation} on '{self.full_name}'")
        return result

    def _prepare_full_document(self, document: Any) -> DefaultDocumentType:
        new_document = normalize_document(document)
        if not new_document:
            logger.debug(f"empty document for '{self.full_name}', no timestamps")
            return {}
        strip_identifier(new_document, DEFAULT_ID_FIELD)
        apply_timestamps(new_document, self._options, True, clock=self._clock)
        return new_document

    def _prepare_update(
        self, update: Any, deletion: bool, *, operation: str
    ) -> dict[str, DefaultDocumentType]:
        update_fields = normalize_document(update)
        if not update_fields:
            raise EmptyUpdateException(
                f"The update document for {operation} cannot be empty.",
                operation=operation,
            )
        if deletion:
            return {UpdateOperator.UNSET: update_fields}
        apply_timestamps(update_fields, self._options, False, clock=self._clock)
        return {UpdateOperator.SET: update_fields}

    def _find_one_raw(
        self,
        context: OperationContext,
        selector: FilterType | None,
        *,
        picker: PickerType | None = None,
        sort: SortType | None = None,
        operation: str,
    ) -> DefaultDocumentType:
        _selector = selector if selector is not None else {}
        _projection = normalize_optional_picker(picker)
        _sort = normalize_optional_sort(sort)
        document: DefaultDocumentType | None = self._execute(
            context,
            lambda coll: coll.find_one(_selector, projection=_projection, sort=_sort),
            operation=operation,
            command="find_one",
            selector=_selector,
        )
        if document is None:
            raise DocumentNotFoundException.for_selector(operation, _selector)
        return document

    def _preserve_create_time(
        self,
        old_document: DefaultDocumentType,
        new_document: DefaultDocumentType,
    ) -> None:
        if CREATE_TIME_FIELD in old_document:
            logger.debug(
                f"preserving {CREATE_TIME_FIELD} of the old document "
                f"on '{self.full_name}'"
            )
            new_document[CREATE_TIME_FIELD] = old_document[CREATE_TIME_FIELD]

    def insert(
        self,
        *documents: Any,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> list[Any]:
        """
        Insert one or more documents in a single driver call.

        Every document is normalized, stripped of any "_id" it carries and
        given the automatic timestamps (as an insert) before anything is written:
        an invalid document makes the whole batch fail with no write at all.
        None and empty documents are skipped.

        Args:
            documents: the documents to insert.
            context: an OperationContext for deadline/cancellation control.
            timeout_ms: a deadline for the operation, in milliseconds.
                Cannot be passed together with `context`.

        Returns:
            the list of the database-assigned ids, in insertion order.

        Example:
            >>> people.insert({"name": "e", "age": 14}, {"name": "f", "age": 13})
            [ObjectId('603a081694ea2e906792a8f5'), ObjectId('603a081694ea2e906792a8f6')]
        """

        to_insert: list[DefaultDocumentType] = []
        for document in documents:
            prepared = self._prepare_full_document(document)
            if prepared:
                to_insert.append(prepared)
        if not to_insert:
            logger.debug(f"nothing to insert on '{self.full_name}'")
            return []
        _context = self._operation_context(context, timeout_ms)
        insert_result = self._execute(
            _context,
            lambda coll: coll.insert_many(to_insert),
            operation="insert",
            command="insert_many",
            is_write=True,
        )
        return list(insert_result.inserted_ids)

    def replace(
        self,
        selector: FilterType,
        document: Any,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Replace a whole document with a new one, keeping the "create_time"
        of the document being replaced.

        The replacement is normalized, stripped of "_id" and timestamped as an
        insert; then the current document is read in full and, if it has a
        "create_time", its value overwrites the one in the replacement;
        finally the replace is issued.

        Args:
            selector: a filter selecting the document to replace.
            document: the new content of the document.
            context: an OperationContext for deadline/cancellation control.
                Both driver calls share it.
            timeout_ms: a deadline for the whole operation, in milliseconds.
                Cannot be passed together with `context`.

        Raises:
            DocumentNotFoundException: if no document matches the selector.
                In that case nothing is written.

        Note:
            The read and the replace are two independent round trips. Should
            another client write the document in between, that write is lost
            (and a "create_time" it set is overwritten by the one read here).
        """

        new_document = self._prepare_full_document(document)
        _context = self._operation_context(context, timeout_ms)
        old_document = self._find_one_raw(_context, selector, operation="replace")
        self._preserve_create_time(old_document, new_document)
        self._execute(
            _context,
            lambda coll: coll.replace_one(selector, new_document),
            operation="replace",
            command="replace_one",
            selector=selector,
            is_write=True,
        )

    def replace_by_id(
        self,
        id: Any,
        document: Any,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Replace the document with the given "_id". See `replace` for details.
        """

        self.replace(
            {DEFAULT_ID_FIELD: id},
            document,
            context=context,
            timeout_ms=timeout_ms,
        )

    def replace_all(
        self,
        selector: FilterType,
        document: Any,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> ChangeInfo:
        """
        Replace every document matching the selector with the same new content.

        A first read collects the ids of the matching documents; the
        "create_time" of the first of them, if any, is written into the
        replacement, which is then applied to all of them in a single bulk write.

        Args:
            selector: a filter selecting the documents to replace.
            document: the new content of the documents.
            context: an OperationContext for deadline/cancellation control.
            timeout_ms: a deadline for the whole operation, in milliseconds.
                Cannot be passed together with `context`.

        Returns:
            a ChangeInfo with the matched and modified counts.

        Raises:
            DocumentNotFoundException: if no document matches the selector.

        Note:
            As for `replace`, there is no isolation between the read and the
            bulk write. Documents starting to match the selector in between
            are not replaced; documents removed in between are not counted.
            The first read loads the "_id" of every matching document into
            memory, and the bulk write carries one replacement per document.
        """

        new_document = self._prepare_full_document(document)
        _context = self._operation_context(context, timeout_ms)
        _projection = {DEFAULT_ID_FIELD: 1, CREATE_TIME_FIELD: 1}
        old_documents: list[DefaultDocumentType] = self._execute(
            _context,
            lambda coll: list(coll.find(selector, projection=_projection)),
            operation="replace_all",
            command="find",
            selector=selector,
        )
        if not old_documents:
            raise DocumentNotFoundException.for_selector("replace_all", selector)
        self._preserve_create_time(old_documents[0], new_document)
        requests = [
            ReplaceOne(
                {DEFAULT_ID_FIELD: old_document[DEFAULT_ID_FIELD]},
                dict(new_document),
            )
            for old_document in old_documents
        ]
        bulk_result = self._execute(
            _context,
            lambda coll: coll.bulk_write(requests, ordered=False),
            operation="replace_all",
            command="bulk_write",
            selector=selector,
            is_write=True,
        )
        return ChangeInfo(
            matched=bulk_result.matched_count,
            modified=bulk_result.modified_count,
            raw_results=[bulk_result.bulk_api_result],
        )

    def modify(
        self,
        selector: FilterType,
        update: Any,
        *,
        deletion: bool = False,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Set (or remove) some fields of the first document matching the selector,
        then read that document back.

        Args:
            selector: a filter selecting the document to modify.
            update: the fields to set, as a document. With `deletion=True`,
                the fields to remove (values are ignored).
            deletion: whether to remove the fields instead of setting them.
                Removals do not touch "update_time".
            document_type: the type the refetched document is returned as.
                See `find_one`.
            context: an OperationContext for deadline/cancellation control.
                Both driver calls share it.
            timeout_ms: a deadline for the whole operation, in milliseconds.
                Cannot be passed together with `context`.

        Returns:
            the document matching the selector after the update. Callers not
            interested can ignore it: the read is issued anyway, so that a
            missing document surfaces as an error.

        Raises:
            EmptyUpdateException: if `update` has no fields. Nothing is written.
            DocumentNotFoundException: if no document matches after the update.

        Example:
            >>> people.modify({"name": "a"}, {"age": 13})
            {'_id': ObjectId('...'), 'name': 'a', 'age': 13, ...}
            >>> people.modify({"name": "a"}, {"gender": ""}, deletion=True)
            {'_id': ObjectId('...'), 'name': 'a', 'age': 13, ...}

        Note:
            The update and the read are two independent round trips: the
            document returned may already reflect writes by other clients
            (or, if the update changed fields used in the selector, a different
            document or none at all).
        """

        update_document = self._prepare_update(update, deletion, operation="modify")
        _context = self._operation_context(context, timeout_ms)
        self._execute(
            _context,
            lambda coll: coll.update_one(selector, update_document),
            operation="modify",
            command="update_one",
            selector=selector,
            is_write=True,
        )
        refetched = self._find_one_raw(_context, selector, operation="modify")
        return materialize_document(refetched, document_type)

    def modify_by_id(
        self,
        id: Any,
        update: Any,
        *,
        deletion: bool = False,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Modify the document with the given "_id". See `modify` for details.
        """

        return self.modify(
            {DEFAULT_ID_FIELD: id},
            update,
            deletion=deletion,
            document_type=document_type,
            context=context,
            timeout_ms=timeout_ms,
        )

    def modify_all(
        self,
        selector: FilterType,
        update: Any,
        *,
        deletion: bool = False,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> ChangeInfo:
        """
        Set (or remove) some fields on all documents matching the selector.
        Same rules as `modify`, but no document is read back.

        Returns:
            a ChangeInfo with the matched and modified counts.

        Raises:
            EmptyUpdateException: if `update` has no fields. Nothing is written.
        """

        update_document = self._prepare_update(
            update, deletion, operation="modify_all"
        )
        _context = self._operation_context(context, timeout_ms)
        update_result = self._execute(
            _context,
            lambda coll: coll.update_many(selector, update_document),
            operation="modify_all",
            command="update_many",
            selector=selector,
            is_write=True,
        )
        return ChangeInfo(
            matched=update_result.matched_count,
            modified=update_result.modified_count,
            raw_results=[update_result.raw_result],
        )

    def remove(
        self,
        selector: FilterType,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """
        Delete the first document matching the selector.

        Raises:
            DocumentNotFoundException: if no document matches the selector.
        """

        _context = self._operation_context(context, timeout_ms)
        delete_result = self._execute(
            _context,
            lambda coll: coll.delete_one(selector),
            operation="remove",
            command="delete_one",
            selector=selector,
            is_write=True,
        )
        if delete_result.deleted_count == 0:
            raise DocumentNotFoundException.for_selector("remove", selector)

    def remove_by_id(
        self,
        id: Any,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        """Delete the document with the given "_id". See `remove`."""

        self.remove(
            {DEFAULT_ID_FIELD: id},
            context=context,
            timeout_ms=timeout_ms,
        )

    def remove_all(
        self,
        selector: FilterType,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> ChangeInfo:
        """
        Delete all documents matching the selector.

        Returns:
            a ChangeInfo with the removed count.
        """

        _context = self._operation_context(context, timeout_ms)
        delete_result = self._execute(
            _context,
            lambda coll: coll.delete_many(selector),
            operation="remove_all",
            command="delete_many",
            selector=selector,
            is_write=True,
        )
        return ChangeInfo(
            matched=delete_result.deleted_count,
            removed=delete_result.deleted_count,
            raw_results=[delete_result.raw_result],
        )

    def find_one(
        self,
        selector: FilterType | None = None,
        picker: PickerType | None = None,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Fetch the first document matching the selector.

        Args:
            selector: a filter such as `{"name": "a"}`. None matches everything.
            picker: the fields to return, e.g. `["name", "age"]` ("_id" is
                always included by the database). None returns all fields.
            document_type: if None, the document is returned as a dictionary.
                Otherwise a class with a `from_mapping` classmethod, a dataclass
                (fields are filled by their declared names, extra keys are
                ignored) or any callable accepting the dictionary.
            context: an OperationContext for deadline/cancellation control.
            timeout_ms: a deadline for the operation, in milliseconds.
                Cannot be passed together with `context`.

        Raises:
            DocumentNotFoundException: if nothing matches.
        """

        _context = self._operation_context(context, timeout_ms)
        document = self._find_one_raw(
            _context, selector, picker=picker, operation="find_one"
        )
        return materialize_document(document, document_type)

    def find_by_id(
        self,
        id: Any,
        picker: PickerType | None = None,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Fetch the document with the given "_id". See `find_one`.
        """

        _context = self._operation_context(context, timeout_ms)
        document = self._find_one_raw(
            _context,
            {DEFAULT_ID_FIELD: id},
            picker=picker,
            operation="find_by_id",
        )
        return materialize_document(document, document_type)

    def find_by_external_id(
        self,
        id_string: str | ObjectId,
        picker: PickerType | None = None,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Fetch a document by the textual (24-digit hexadecimal) form of its
        ObjectId, as found e.g. in URLs. See `find_one`.

        Raises:
            InvalidIdentifierException: if `id_string` is not a valid ObjectId.
            DocumentNotFoundException: if no document has this id.

        Example:
            >>> people.find_by_external_id("603a081694ea2e906792a8f1", ["name"])
            {'_id': ObjectId('603a081694ea2e906792a8f1'), 'name': 'a'}
        """

        object_id = parse_object_id(id_string)
        _context = self._operation_context(context, timeout_ms)
        document = self._find_one_raw(
            _context,
            {DEFAULT_ID_FIELD: object_id},
            picker=picker,
            operation="find_by_external_id",
        )
        return materialize_document(document, document_type)

    def find_with_sort(
        self,
        selector: FilterType | None,
        sort: SortType | None,
        picker: PickerType | None = None,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Fetch the first document matching the selector in the given order.

        Args:
            selector: a filter. None matches everything.
            sort: a list of field names, each optionally prefixed with "-"
                for descending order, e.g. `["-age", "name"]`. If empty, the
                order is the database default.
            picker: the fields to return. None returns all fields.
            document_type: see `find_one`.

        Raises:
            DocumentNotFoundException: if nothing matches.
        """

        _context = self._operation_context(context, timeout_ms)
        document = self._find_one_raw(
            _context,
            selector,
            picker=picker,
            sort=sort,
            operation="find_with_sort",
        )
        return materialize_document(document, document_type)

    def find_all(
        self,
        selector: FilterType | None = None,
        sort: SortType | None = None,
        picker: PickerType | None = None,
        skip: int = 0,
        limit: int = 0,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> list[Any]:
        """
        Fetch all documents matching the selector.

        Args:
            selector: a filter. None matches everything.
            sort: a list of field names, "-"-prefixed for descending order.
            picker: the fields to return. None returns all fields.
            skip: the number of documents to skip. Zero or less: no skip.
            limit: the maximum number of documents. Zero or less: no limit.
            document_type: see `find_one`.

        Returns:
            a list, possibly empty, of the matching documents.

        Example:
            >>> page = people.find_all({"gender": "1"}, ["age"], skip=10, limit=5)
        """

        _selector = selector if selector is not None else {}
        _projection = normalize_optional_picker(picker)
        _sort = normalize_optional_sort(sort)

        def _find_all(coll: DriverCollection[Any]) -> list[DefaultDocumentType]:
            cursor = coll.find(_selector, projection=_projection)
            if _sort:
                cursor = cursor.sort(_sort)
            if skip > 0:
                cursor = cursor.skip(skip)
            if limit > 0:
                cursor = cursor.limit(limit)
            return list(cursor)

        _context = self._operation_context(context, timeout_ms)
        documents = self._execute(
            _context,
            _find_all,
            operation="find_all",
            command="find",
            selector=_selector,
        )
        return [materialize_document(document, document_type) for document in documents]

    def count(
        self,
        selector: FilterType | None = None,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> int:
        """
        Count the documents matching the selector, without fetching them.
        """

        _selector = selector if selector is not None else {}
        _context = self._operation_context(context, timeout_ms)
        count: int = self._execute(
            _context,
            lambda coll: coll.count_documents(_selector),
            operation="count",
            command="count_documents",
            selector=_selector,
        )
        return count

    def pipe_all(
        self,
        pipeline: PipelineType,
        *,
        document_type: Callable[..., Any] | None = None,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> list[Any]:
        """
        Run an aggregation pipeline and return all its results.

        Example:
            >>> people.pipe_all(
            ...     [
            ...         {"$match": {"gender": "1"}},
            ...         {"$group": {"_id": "$age", "n": {"$sum": 1}}},
            ...     ]
            ... )
            [{'_id': 12, 'n': 1}, {'_id': 13, 'n': 2}, ...]
        """

        _pipeline = list(pipeline)
        _context = self._operation_context(context, timeout_ms)
        documents = self._execute(
            _context,
            lambda coll: list(coll.aggregate(_pipeline)),
            operation="pipe_all",
            command="aggregate",
            selector=_pipeline,
        )
        return [materialize_document(document, document_type) for document in documents]

    def distinct(
        self,
        selector: FilterType | None,
        key: str,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> list[Any]:
        """
        Return the distinct values of field `key` across the documents matching
        the selector. The order of the values is unspecified.

        Example:
            >>> # ages in the collection: 12, 13, 14, 15, 14, 13
            >>> people.distinct({"gender": "1"}, "age")
            [12, 13, 14, 15]
        """

        _selector = selector if selector is not None else {}
        _context = self._operation_context(context, timeout_ms)
        values: list[Any] = self._execute(
            _context,
            lambda coll: list(coll.distinct(key, _selector)),
            operation="distinct",
            command="distinct",
            selector=_selector,
        )
        return values

    def indexes(
        self,
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> list[IndexInfo]:
        """
        List the indexes declared on the collection.
        """

        _context = self._operation_context(context, timeout_ms)
        raw_indexes = self._execute(
            _context,
            lambda coll: list(coll.list_indexes()),
            operation="indexes",
            command="list_indexes",
        )
        return [IndexInfo._from_dict(raw_index) for raw_index in raw_indexes]

    def do_with_context(
        self,
        unit_of_work: Callable[[DriverCollection[Any]], T],
        *,
        context: OperationContext | None = None,
        timeout_ms: int | None = None,
    ) -> T:
        """
        Run a custom function against the driver collection, with the same
        deadline, cancellation and error handling as the other methods.
        Meant for needs this class does not cover. The function may write, so
        its result is returned even if the context is cancelled while it runs.

        Example:
            >>> store.do_with_context(
            ...     lambda coll: coll.create_index("name", unique=True)
            ... )
            'name_1'
        """

        _context = self._operation_context(context, timeout_ms)
        return self._execute(
            _context,
            unit_of_work,
            operation="do_with_context",
            command="custom",
            is_write=True,
        )

    @deprecated_alias("replace_by_id")
    def replace_id(self, *pargs: Any, **kwargs: Any) -> None: ...

    @deprecated_alias("modify_by_id")
    def modify_id(self, *pargs: Any, **kwargs: Any) -> Any: ...

    @deprecated_alias("find_by_id")
    def find_id(self, *pargs: Any, **kwargs: Any) -> Any: ...

    @deprecated_alias("find_by_external_id")
    def find_object_id(self, *pargs: Any, **kwargs: Any) -> Any: ...

    @deprecated_alias("find_with_sort")
    def find_one_with_sort(self, *pargs: Any, **kwargs: Any) -> Any: ...

    @deprecated_alias("remove_by_id")
    def remove_id(self, *pargs: Any, **kwargs: Any) -> None: ...


def parse_object_id(id_string: str | ObjectId) -> ObjectId:
    """
    Parse the 24-digit hexadecimal form of an ObjectId. ObjectId instances
    are returned as they are.

    Raises:
        InvalidIdentifierException: for any other input.
    """

    if isinstance(id_string, ObjectId):
        return id_string
    if isinstance(id_string, str) and ObjectId.is_valid(id_string):
        return ObjectId(id_string)
    raise InvalidIdentifierException(
        f"Not a valid ObjectId: {id_string!r} (expected 24 hexadecimal digits).",
        identifier=id_string,
    )
