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
from typing import Any, Mapping


@dataclass
class IndexInfo:
    """
    A description of an index declared on a collection, as reported by the driver.

    Attributes:
        name: the name of the index.
        keys: the indexed fields, in order, each with its direction
            (1, -1, or a string for special indexes such as "text").
        unique: whether the index enforces uniqueness.
        raw_info: the full index description returned by the driver.
    """

    name: str
    keys: list[tuple[str, Any]]
    unique: bool
    raw_info: dict[str, Any] | None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, keys={self.keys})"

    @staticmethod
    def _from_dict(raw_dict: Mapping[str, Any]) -> IndexInfo:
        """
        Create an instance of IndexInfo from a dictionary such as
        one item of the driver's list_indexes response.
        """

        return IndexInfo(
            name=raw_dict["name"],
            keys=[(field, direction) for field, direction in raw_dict["key"].items()],
            unique=bool(raw_dict.get("unique", False)),
            raw_info=dict(raw_dict),
        )
