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

import threading
import time
from typing import Any

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from docstore.exceptions.store_exceptions import (
    DocumentNotFoundException,
    DocumentStoreException,
    EmptyUpdateException,
    InvalidDocumentShapeException,
    InvalidIdentifierException,
    OperationCancelledException,
    StoreOperationException,
    StoreTimeoutException,
    summarize_selector,
)


def to_store_exception(
    driver_error: PyMongoError | BSONError,
    *,
    operation: str,
    selector: Any = None,
    timeout_ms: int | None = None,
) -> DocumentStoreException:
    """
    Wrap an error raised by the driver into the exception this layer exposes,
    attaching the operation name and a summary of the selector.
    Driver-reported timeouts become a StoreTimeoutException. Encoding errors
    (values or keys BSON cannot represent) are wrapped like any other failure.
    """

    selector_summary = None if selector is None else summarize_selector(selector)
    text_0 = str(driver_error) or driver_error.__class__.__name__
    if isinstance(driver_error, PyMongoError) and driver_error.timeout:
        if timeout_ms:
            text = f"{text_0} (timeout honoured: {timeout_ms} ms)"
        else:
            text = text_0
        return StoreTimeoutException(
            f"{operation} timed out: {text}",
            operation=operation,
            timeout_ms=timeout_ms,
        )
    if selector_summary is not None:
        text = f"{operation} failed (selector: {selector_summary}): {text_0}"
    else:
        text = f"{operation} failed: {text_0}"
    return StoreOperationException(
        text,
        operation=operation,
        selector_summary=selector_summary,
        error=driver_error,
    )


class OperationContext:
    """
    The cancellation/deadline scope of one store operation. A single context
    spans all the driver round trips of an operation (e.g. the read and the
    write of a replace), and can be shared by several operations.

    Args:
        timeout_ms: an optional deadline, in milliseconds from the creation of
            the context. Zero or None mean no deadline.
        timeout_label: the name of the setting the deadline comes from, used
            in error messages.

    Attributes:
        timeout_ms: the deadline duration (milliseconds), if any.
        started_ms: monotonic timestamp of the context creation (milliseconds).
        deadline_ms: the monotonic deadline in milliseconds, if any.
    """

    timeout_ms: int | None
    started_ms: int
    deadline_ms: int | None
    timeout_label: str | None

    def __init__(
        self,
        timeout_ms: int | None = None,
        *,
        timeout_label: str | None = None,
    ) -> None:
        self.started_ms = int(time.monotonic() * 1000)
        self.timeout_label = timeout_label
        # zero timeouts are mapped to None for deadline management:
        self.timeout_ms = timeout_ms or None
        if self.timeout_ms is not None:
            self.deadline_ms = self.started_ms + self.timeout_ms
        else:
            self.deadline_ms = None
        self._cancelled = threading.Event()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(timeout_ms={self.timeout_ms}, "
            f"cancelled={self.cancelled})"
        )

    def cancel(self) -> None:
        """Cancel the context. Can be called from any thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def check_cancelled(self, operation: str | None = None) -> None:
        if self._cancelled.is_set():
            if operation:
                err_msg = f"Operation {operation} was cancelled."
            else:
                err_msg = "Operation was cancelled."
            raise OperationCancelledException(err_msg, operation=operation)

    def remaining_timeout(self, operation: str | None = None) -> float | None:
        """
        Ensure the context is neither cancelled nor past its deadline, raising
        the appropriate exception otherwise.

        Returns:
            the remaining time in seconds, or None if there is no deadline.
            This is the form accepted by `pymongo.timeout`.
        """

        self.check_cancelled(operation)
        if self.deadline_ms is None:
            return None
        now_ms = int(time.monotonic() * 1000)
        if now_ms < self.deadline_ms:
            return (self.deadline_ms - now_ms) / 1000.0
        if self.timeout_label:
            err_msg = (
                f"Operation timed out (timeout honoured: {self.timeout_label} "
                f"= {self.timeout_ms} ms)."
            )
        else:
            err_msg = f"Operation timed out (timeout honoured: {self.timeout_ms} ms)."
        raise StoreTimeoutException(
            err_msg,
            operation=operation,
            timeout_ms=self.timeout_ms,
        )


__all__ = [
    "DocumentNotFoundException",
    "DocumentStoreException",
    "EmptyUpdateException",
    "InvalidDocumentShapeException",
    "InvalidIdentifierException",
    "OperationCancelledException",
    "OperationContext",
    "StoreOperationException",
    "StoreTimeoutException",
]

__pdoc__ = {
    "to_store_exception": False,
}
