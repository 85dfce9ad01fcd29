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

import datetime
import os
from dataclasses import dataclass, fields
from typing import Any, Mapping

import toml

from docstore.settings.defaults import (
    DEFAULT_INSERT_TIME_AUTO,
    DEFAULT_TIME_FORMAT,
    DEFAULT_TIME_ZONE,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TOML_SECTION,
    DEFAULT_UPDATE_TIME_AUTO,
)
from docstore.utils.unset import _UNSET, UnsetType


def _parse_time_zone(value: Any) -> datetime.tzinfo | None:
    if value is None or isinstance(value, datetime.tzinfo):
        return value
    if isinstance(value, str):
        if value.upper() in {"UTC", "Z"}:
            return datetime.timezone.utc
        if value.lower() == "local":
            return None
        # "+02:00", "-0530"
        sign = -1 if value.startswith("-") else 1
        digits = value.lstrip("+-").replace(":", "")
        if len(digits) == 4 and digits.isdigit():
            offset = datetime.timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
            return datetime.timezone(sign * offset)
    raise ValueError(f"Unparseable time zone setting: {value!r}.")


@dataclass
class StoreOptions:
    """
    A set of options governing the behaviour of a DocumentStore, possibly
    specified only in part.

    Options are layered: the StoreClient holds a complete set of options
    (see `FullStoreOptions`), and each store obtained from it can override
    any subset of them. Values left unspecified keep the inherited setting.

    Attributes:
        update_time_auto: whether to fill an "update_time" field, if absent,
            on every document written through insert, replace and modify.
        insert_time_auto: whether to fill a "create_time" field, if absent,
            on documents written through insert and replace.
        time_format: a `strftime` format for the automatic timestamps. If None,
            the timestamps are stored as (timezone-aware) datetime objects.
        time_zone: the time zone used for the automatic timestamps. None stands
            for the local time of the machine.
        timeout_ms: a default deadline, in milliseconds, for each operation.
            Zero means no deadline is imposed.
    """

    update_time_auto: bool | UnsetType = _UNSET
    insert_time_auto: bool | UnsetType = _UNSET
    time_format: str | None | UnsetType = _UNSET
    time_zone: datetime.tzinfo | None | UnsetType = _UNSET
    timeout_ms: int | UnsetType = _UNSET

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> StoreOptions:
        """
        Create a partial options object out of a plain dictionary, such as the
        one found in a configuration file. Keys not among the attributes of this
        class raise an error.
        """

        known_names = {fld.name for fld in fields(cls)}
        unknown_names = sorted(set(settings) - known_names)
        if unknown_names:
            raise ValueError(
                f"Unknown store option(s): {', '.join(unknown_names)}. "
                f"Admitted options are: {', '.join(sorted(known_names))}."
            )
        parsed: dict[str, Any] = {}
        for name, value in settings.items():
            if name in {"update_time_auto", "insert_time_auto"}:
                if not isinstance(value, bool):
                    raise ValueError(f"Store option '{name}' must be a boolean.")
                parsed[name] = value
            elif name == "time_format":
                # an empty string in a config file stands for "native datetimes"
                parsed[name] = value or None
            elif name == "time_zone":
                parsed[name] = _parse_time_zone(value)
            elif name == "timeout_ms":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ValueError("Store option 'timeout_ms' must be an int >= 0.")
                parsed[name] = value
        return cls(**parsed)

    @classmethod
    def from_toml(
        cls,
        source: str | os.PathLike[str],
        *,
        section: str = DEFAULT_TOML_SECTION,
    ) -> StoreOptions:
        """
        Read the options from a TOML document, either a path to a file or the
        TOML text itself. The options are expected in a table named after
        `section` (a missing table yields an empty set of options).

        Example:
            >>> StoreOptions.from_toml('''
            ... [docstore]
            ... update_time_auto = true
            ... insert_time_auto = true
            ... ''')
            StoreOptions(update_time_auto=True, insert_time_auto=True, ...)
        """

        if isinstance(source, os.PathLike) or os.path.isfile(source):
            with open(source, encoding="utf-8") as toml_file:
                toml_data = toml.load(toml_file)
        else:
            toml_data = toml.loads(source)
        return cls.from_dict(toml_data.get(section) or {})


@dataclass
class FullStoreOptions(StoreOptions):
    """
    A complete set of options for a DocumentStore, with every attribute set.
    See `StoreOptions` for the meaning of the attributes.
    """

    update_time_auto: bool
    insert_time_auto: bool
    time_format: str | None
    time_zone: datetime.tzinfo | None
    timeout_ms: int

    def __init__(
        self,
        *,
        update_time_auto: bool,
        insert_time_auto: bool,
        time_format: str | None,
        time_zone: datetime.tzinfo | None,
        timeout_ms: int,
    ) -> None:
        StoreOptions.__init__(
            self,
            update_time_auto=update_time_auto,
            insert_time_auto=insert_time_auto,
            time_format=time_format,
            time_zone=time_zone,
            timeout_ms=timeout_ms,
        )

    def with_override(self, other: StoreOptions | None | UnsetType) -> FullStoreOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.

        Args:
            other: a not-necessarily-fully-specified options object. All its defined
                settings take precedence.
        """

        if other is None or isinstance(other, UnsetType):
            return self
        return FullStoreOptions(
            update_time_auto=(
                other.update_time_auto
                if not isinstance(other.update_time_auto, UnsetType)
                else self.update_time_auto
            ),
            insert_time_auto=(
                other.insert_time_auto
                if not isinstance(other.insert_time_auto, UnsetType)
                else self.insert_time_auto
            ),
            time_format=(
                other.time_format
                if not isinstance(other.time_format, UnsetType)
                else self.time_format
            ),
            time_zone=(
                other.time_zone
                if not isinstance(other.time_zone, UnsetType)
                else self.time_zone
            ),
            timeout_ms=(
                other.timeout_ms
                if not isinstance(other.timeout_ms, UnsetType)
                else self.timeout_ms
            ),
        )


def defaultStoreOptions() -> FullStoreOptions:
    return FullStoreOptions(
        update_time_auto=DEFAULT_UPDATE_TIME_AUTO,
        insert_time_auto=DEFAULT_INSERT_TIME_AUTO,
        time_format=DEFAULT_TIME_FORMAT,
        time_zone=DEFAULT_TIME_ZONE,
        timeout_ms=DEFAULT_TIMEOUT_MS,
    )
