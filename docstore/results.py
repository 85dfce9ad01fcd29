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

from abc import ABC
from dataclasses import dataclass
from typing import Any


@dataclass
class OperationResult(ABC):
    """
    Class that represents the generic result of a write operation.

    Attributes:
        raw_results: the raw results returned by the driver call(s).
    """

    raw_results: list[Any]

    def _piecewise_repr(self, pieces: list[str | None]) -> str:
        return f"{self.__class__.__name__}({', '.join(pc for pc in pieces if pc)})"


@dataclass
class ChangeInfo(OperationResult):
    """
    Summary of a bulk write: how many documents were matched by the selector
    and how many were actually changed or removed.

    Attributes:
        matched: number of documents matched by the selector.
        modified: number of documents that were changed by an update/replace.
        removed: number of documents deleted by a remove.
        raw_results: the raw results returned by the driver call(s).
    """

    matched: int
    modified: int
    removed: int

    def __init__(
        self,
        *,
        matched: int = 0,
        modified: int = 0,
        removed: int = 0,
        raw_results: list[Any] | None = None,
    ) -> None:
        self.matched = matched
        self.modified = modified
        self.removed = removed
        self.raw_results = raw_results if raw_results is not None else []

    def __repr__(self) -> str:
        return self._piecewise_repr(
            [
                f"matched={self.matched}",
                f"modified={self.modified}",
                f"removed={self.removed}",
                "raw_results=..." if self.raw_results else None,
            ]
        )
