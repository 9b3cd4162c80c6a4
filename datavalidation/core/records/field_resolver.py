"""
Field path resolution over nested records.

A record is either a mapping or a plain object (dataclass, pydantic model or
any class with attributes). Each value met along a path is classified into a
ValueShape, and only mappings and objects can be walked into. Resolution never
raises: anything that cannot be followed resolves to None (absent).
"""

import numbers
from collections.abc import Mapping
from datetime import date, time, timedelta
from enum import Enum
from typing import Any


SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    numbers.Number,
    date,
    time,
    timedelta,
    Enum,
    list,
    tuple,
    set,
    frozenset,
)


class ValueShape(str, Enum):
    """How a value can be traversed."""

    MAPPING = "mapping"
    OBJECT = "object"
    SCALAR = "scalar"
    ABSENT = "absent"


def classify(value: Any) -> ValueShape:
    if value is None:
        return ValueShape.ABSENT
    if isinstance(value, Mapping):
        return ValueShape.MAPPING
    if isinstance(value, SCALAR_TYPES):
        return ValueShape.SCALAR
    return ValueShape.OBJECT


def get_key(mapping: Mapping, name: str) -> Any:
    try:
        return mapping.get(name)
    except Exception:
        return None


def get_member(obj: Any, name: str) -> Any:
    """
    Return the data member `name` of an object, or None.

    Private names and callables (methods) are not data members. Any error raised
    while reading the attribute, e.g. by a property, resolves to None.
    """
    if name.startswith("_"):
        return None

    try:
        value = getattr(obj, name)
    except Exception:
        return None

    if callable(value) and not isinstance(value, type):
        return None
    return value


class FieldResolver:
    """Resolves dot-separated field paths against records."""

    def resolve(self, record: Any, path: str) -> Any:
        """
        Resolve a field path against a record.

        Args:
            record: Mapping or object at the root of the path
            path: Dot-separated field path (e.g., "address.zipCode")

        Returns:
            The value at the path, or None if any segment is missing
        """
        current = record
        for segment in path.split("."):
            shape = classify(current)

            if shape is ValueShape.MAPPING:
                current = get_key(current, segment)
            elif shape is ValueShape.OBJECT:
                current = get_member(current, segment)
            else:
                return None

            if current is None:
                return None

        return current

    def shape_of(self, record: Any, path: str) -> ValueShape:
        return classify(self.resolve(record, path))
