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

import dataclasses
from typing import Any, Callable, Dict, Mapping, Protocol, runtime_checkable

from docstore.constants import DefaultDocumentType
from docstore.exceptions import InvalidDocumentShapeException

# keys of the dataclass field metadata understood by the converters
FIELD_NAME_METADATA_KEY = "name"
FIELD_OMITEMPTY_METADATA_KEY = "omitempty"


@runtime_checkable
class TypedRecord(Protocol):
    """
    A structured record that knows how to express itself as a document.

    Classes implementing `to_mapping` can be passed wherever a document
    is expected. Implementing an optional `from_mapping` classmethod as well
    makes the class usable as `document_type` in the read methods.
    """

    def to_mapping(self) -> Mapping[str, Any]: ...


def document_field_name(field: dataclasses.Field[Any]) -> str:
    """The document key for a dataclass field: its declared name, if any."""
    declared_name = field.metadata.get(FIELD_NAME_METADATA_KEY)
    return declared_name if declared_name else field.name


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _convert_record_value(value: Any) -> Any:
    if isinstance(value, TypedRecord):
        return _copy_mapping(value.to_mapping(), source=value)
    elif _is_dataclass_instance(value):
        return _dataclass_to_mapping(value)
    elif isinstance(value, list):
        return [_convert_record_value(item) for item in value]
    elif isinstance(value, tuple):
        return [_convert_record_value(item) for item in value]
    elif isinstance(value, dict):
        return {k: _convert_record_value(v) for k, v in value.items()}
    else:
        return value


def _dataclass_to_mapping(record: Any) -> DefaultDocumentType:
    document: DefaultDocumentType = {}
    for field in dataclasses.fields(record):
        value = getattr(record, field.name)
        if field.metadata.get(FIELD_OMITEMPTY_METADATA_KEY) and not value:
            continue
        document[document_field_name(field)] = _convert_record_value(value)
    return document


def _copy_mapping(mapping: Any, *, source: Any) -> DefaultDocumentType:
    if not isinstance(mapping, Mapping):
        raise InvalidDocumentShapeException(
            f"The 'to_mapping' method of {type(source).__name__} did not "
            f"return a mapping (got {type(mapping).__name__}).",
            value_type=type(source).__name__,
        )
    return dict(mapping)


def normalize_document(document: Any) -> DefaultDocumentType | None:
    """
    Convert an input record into the canonical document form, a plain dict
    from field names to values.

    Args:
        document: a mapping, a TypedRecord (an object with a `to_mapping`
            method), a dataclass instance or None.

    Returns:
        None if the input is None, otherwise a new dictionary, never
        an alias of the caller's object. An empty dictionary means there is
        nothing to write.

    Raises:
        InvalidDocumentShapeException: if the input has any other shape.
    """

    if document is None:
        return None
    elif isinstance(document, Mapping):
        return dict(document)
    elif isinstance(document, TypedRecord):
        return _copy_mapping(document.to_mapping(), source=document)
    elif _is_dataclass_instance(document):
        return _dataclass_to_mapping(document)
    else:
        raise InvalidDocumentShapeException(
            f"Cannot use a value of type {type(document).__name__} as a document: "
            "a mapping, a dataclass instance or an object with a 'to_mapping' "
            "method is required.",
            value_type=type(document).__name__,
        )


def materialize_document(
    document: DefaultDocumentType,
    document_type: Callable[..., Any] | None,
) -> Any:
    """
    Build the caller-facing result of a read out of a raw document.

    Args:
        document: the document as returned by the driver.
        document_type: None for plain dictionaries, otherwise a class with a
            `from_mapping` classmethod, a dataclass (whose fields are matched by
            their declared names, other keys being ignored) or any callable
            accepting the document.
    """

    if document_type is None:
        return document
    from_mapping = getattr(document_type, "from_mapping", None)
    if callable(from_mapping):
        return from_mapping(document)
    if isinstance(document_type, type) and dataclasses.is_dataclass(document_type):
        init_kwargs: Dict[str, Any] = {}
        for field in dataclasses.fields(document_type):
            if not field.init:
                continue
            key = document_field_name(field)
            if key in document:
                init_kwargs[field.name] = document[key]
        return document_type(**init_kwargs)
    return document_type(document)


def strip_identifier(
    document: DefaultDocumentType | None, id_field: str
) -> DefaultDocumentType | None:
    """Remove the identity field, so that the driver always assigns it."""

    if document:
        document.pop(id_field, None)
    return document
