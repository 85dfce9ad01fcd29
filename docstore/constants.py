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

from typing import Any, Dict, List, Mapping, Sequence, Tuple

import pymongo

DefaultDocumentType = Dict[str, Any]
FilterType = Mapping[str, Any]
PickerType = Sequence[str]
SortType = Sequence[str]
PipelineType = Sequence[Mapping[str, Any]]
DriverSortType = List[Tuple[str, int]]


def normalize_optional_picker(picker: PickerType | None) -> dict[str, int] | None:
    """
    Turn an ordered list of field names into an inclusion projection for
    the driver. A None picker means "all fields" and is passed along as None.
    """

    if picker is None:
        return None
    if isinstance(picker, str):
        raise TypeError(
            "The picker must be a sequence of field names, not a single string."
        )
    return {field: 1 for field in picker}


def normalize_optional_sort(sort: SortType | None) -> DriverSortType | None:
    """
    Turn a list of field names, each optionally prefixed with "-" (descending)
    or "+" (ascending), into the (field, direction) pairs the driver expects.
    """

    if not sort:
        return None
    if isinstance(sort, str):
        raise TypeError(
            "The sort spec must be a sequence of field names, not a single string."
        )
    driver_sort: DriverSortType = []
    for sort_field in sort:
        if sort_field.startswith("-"):
            field_name, direction = sort_field[1:], SortMode.DESCENDING
        elif sort_field.startswith("+"):
            field_name, direction = sort_field[1:], SortMode.ASCENDING
        else:
            field_name, direction = sort_field, SortMode.ASCENDING
        if field_name == "":
            raise ValueError(f"Invalid empty field name in sort spec: {sort!r}.")
        driver_sort.append((field_name, direction))
    return driver_sort


class SortMode:
    """
    Sort directions as understood by the driver. In a sort spec, a field name
    with a leading "-" maps to DESCENDING, any other to ASCENDING.
    """

    def __init__(self) -> None:
        raise NotImplementedError

    ASCENDING = pymongo.ASCENDING
    DESCENDING = pymongo.DESCENDING


class UpdateOperator:
    """
    The two update operators used by the modify family of methods.
    """

    def __init__(self) -> None:
        raise NotImplementedError

    SET = "$set"
    UNSET = "$unset"
