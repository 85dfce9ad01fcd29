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
from typing import Any, Callable

from docstore.constants import DefaultDocumentType
from docstore.settings.defaults import CREATE_TIME_FIELD, UPDATE_TIME_FIELD
from docstore.utils.store_options import FullStoreOptions

ClockType = Callable[[], datetime.datetime]


def _system_clock() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def current_timestamp(
    options: FullStoreOptions,
    clock: ClockType | None = None,
) -> Any:
    """
    The value stored for automatic timestamps: the current time in the
    configured time zone, formatted with the configured format (or left as
    a datetime if the format is None).
    """

    now = (clock or _system_clock)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)
    now = now.astimezone(options.time_zone)
    if options.time_format is None:
        return now
    return now.strftime(options.time_format)


def apply_timestamps(
    document: DefaultDocumentType | None,
    options: FullStoreOptions,
    is_insert: bool,
    *,
    clock: ClockType | None = None,
) -> DefaultDocumentType | None:
    """
    Fill the automatic "update_time" and "create_time" fields of a normalized
    document according to the store options. Fields already present are never
    overwritten. Empty (or None) documents are returned as they are.

    Args:
        document: a normalized document. It is modified in place and returned.
        options: the options of the store performing the write.
        is_insert: whether the document is presented as the full content of a
            document (insert and replace), as opposed to a partial update.
            Only in the former case is "create_time" considered.
        clock: an optional callable returning the current datetime.
    """

    if not document:
        return document
    if not (options.update_time_auto or (options.insert_time_auto and is_insert)):
        return document
    now = current_timestamp(options, clock=clock)
    if options.update_time_auto and UPDATE_TIME_FIELD not in document:
        document[UPDATE_TIME_FIELD] = now
    if options.insert_time_auto and is_insert and CREATE_TIME_FIELD not in document:
        document[CREATE_TIME_FIELD] = now
    return document
