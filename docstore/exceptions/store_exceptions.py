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

from dataclasses import dataclass
from typing import Any

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from docstore.settings.defaults import SELECTOR_SUMMARY_MAX_LENGTH


def summarize_selector(selector: Any) -> str:
    """A short, printable rendition of a selector for use in error messages."""

    summary = repr(selector)
    if len(summary) > SELECTOR_SUMMARY_MAX_LENGTH:
        return f"{summary[: SELECTOR_SUMMARY_MAX_LENGTH - 3]}..."
    return summary


class DocumentStoreException(Exception):
    """
    Any exception raised by the document store layer, as opposed to
    exceptions raised by the driver and not (yet) wrapped by this layer.
    """

    pass


@dataclass
class InvalidDocumentShapeException(DocumentStoreException, TypeError):
    """
    A value was passed where a document was expected, but it is neither a mapping
    nor a structured record convertible to one.

    Attributes:
        text: a text message about the exception.
        value_type: the name of the type of the offending value.
    """

    text: str
    value_type: str

    def __init__(self, text: str, *, value_type: str) -> None:
        super().__init__(text)
        self.text = text
        self.value_type = value_type


@dataclass
class EmptyUpdateException(DocumentStoreException, ValueError):
    """
    A modify operation was requested with no fields to set or unset.

    Attributes:
        text: a text message about the exception.
        operation: the name of the store operation.
    """

    text: str
    operation: str

    def __init__(self, text: str, *, operation: str) -> None:
        super().__init__(text)
        self.text = text
        self.operation = operation


@dataclass
class DocumentNotFoundException(DocumentStoreException):
    """
    No document matched the selector of an operation that requires one:
    the read preceding a replace, the refetch following a modify, or any
    of the single-document find methods.

    Attributes:
        text: a text message about the exception.
        operation: the name of the store operation.
        selector: the selector that matched nothing.
    """

    text: str
    operation: str
    selector: Any

    def __init__(self, text: str, *, operation: str, selector: Any) -> None:
        super().__init__(text)
        self.text = text
        self.operation = operation
        self.selector = selector

    @staticmethod
    def for_selector(operation: str, selector: Any) -> DocumentNotFoundException:
        return DocumentNotFoundException(
            f"No document found by {operation} for selector "
            f"{summarize_selector(selector)}.",
            operation=operation,
            selector=selector,
        )


@dataclass
class InvalidIdentifierException(DocumentStoreException, ValueError):
    """
    A textual identifier could not be parsed into an ObjectId.

    Attributes:
        text: a text message about the exception.
        identifier: the offending input.
    """

    text: str
    identifier: Any

    def __init__(self, text: str, *, identifier: Any) -> None:
        super().__init__(text)
        self.text = text
        self.identifier = identifier


@dataclass
class StoreOperationException(DocumentStoreException):
    """
    The driver raised an error while executing a store operation, or could not
    encode its payload as BSON. The original driver exception is available as `error` (and as the `__cause__`).

    Attributes:
        text: a text message about the exception.
        operation: the name of the store operation.
        selector_summary: a short rendition of the selector involved, if any.
        error: the exception raised by the driver.
    """

    text: str
    operation: str
    selector_summary: str | None
    error: PyMongoError | BSONError

    def __init__(
        self,
        text: str,
        *,
        operation: str,
        selector_summary: str | None,
        error: PyMongoError | BSONError,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.operation = operation
        self.selector_summary = selector_summary
        self.error = error


@dataclass
class StoreTimeoutException(DocumentStoreException):
    """
    An operation did not complete within its deadline, either because the deadline
    had already passed before a driver call or because the driver reported a timeout.

    Attributes:
        text: a text message about the exception.
        operation: the name of the store operation.
        timeout_ms: the deadline that was honoured, in milliseconds, if known.
    """

    text: str
    operation: str | None
    timeout_ms: int | None

    def __init__(
        self,
        text: str,
        *,
        operation: str | None,
        timeout_ms: int | None,
    ) -> None:
        super().__init__(text)
        self.text = text
        self.operation = operation
        self.timeout_ms = timeout_ms


@dataclass
class OperationCancelledException(DocumentStoreException):
    """
    The context of an operation was cancelled before the operation completed.
    Results of reads obtained after the cancellation are discarded. Writes are
    never reported as cancelled once the driver returned, but an operation made
    of several round trips (such as modify, with its refetch) can raise this
    after an earlier write of its own was committed.

    Attributes:
        text: a text message about the exception.
        operation: the name of the store operation.
    """

    text: str
    operation: str | None

    def __init__(self, text: str, *, operation: str | None) -> None:
        super().__init__(text)
        self.text = text
        self.operation = operation
