"""
Tagged view over a parsed JSON tree.

The shape of a recovered value is not known ahead of time. JsonValue wraps
it with an explicit kind and accessors that raise ShapeError on mismatch
instead of returning None.

Usage:
    plan = JsonValue(result.value)
    monday = plan.get("weeklyPlan").get("monday")
    calories = monday.get("breakfast").get("nutrition").get("calories").as_number()
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Union

from .exceptions import ShapeError


class JsonKind(str, Enum):
    """Kinds of JSON values."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    # bool is a subclass of int, so it must be checked first.
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


class JsonValue:
    """A parsed JSON value tagged with its kind and its path in the tree."""

    __slots__ = ("raw", "kind", "path")

    def __init__(self, raw: Any, path: str = "$"):
        self.raw = raw
        self.kind = kind_of(raw)
        self.path = path

    def __repr__(self) -> str:
        return f"JsonValue(kind={self.kind.value}, path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonValue):
            return self.raw == other.raw
        return NotImplemented

    def _expect(self, kind: JsonKind) -> None:
        if self.kind != kind:
            raise ShapeError(kind.value, self.kind.value, self.path)

    @property
    def is_null(self) -> bool:
        return self.kind == JsonKind.NULL

    def as_object(self) -> dict[str, Any]:
        self._expect(JsonKind.OBJECT)
        return self.raw

    def as_array(self) -> list[Any]:
        self._expect(JsonKind.ARRAY)
        return self.raw

    def as_str(self) -> str:
        self._expect(JsonKind.STRING)
        return self.raw

    def as_number(self) -> Union[int, float]:
        self._expect(JsonKind.NUMBER)
        return self.raw

    def as_bool(self) -> bool:
        self._expect(JsonKind.BOOLEAN)
        return self.raw

    def get(self, key: str) -> "JsonValue":
        """Return the member under key. Raises ShapeError if it is missing."""
        members = self.as_object()
        path = f"{self.path}.{key}"
        if key not in members:
            raise ShapeError("member", "missing", path)
        return JsonValue(members[key], path)

    def at(self, index: int) -> "JsonValue":
        """Return the array element at index. Raises ShapeError if out of range."""
        items = self.as_array()
        path = f"{self.path}[{index}]"
        if not -len(items) <= index < len(items):
            raise ShapeError("element", "missing", path)
        return JsonValue(items[index], path)

    def has(self, key: str) -> bool:
        return key in self.as_object()

    def keys(self) -> list[str]:
        return list(self.as_object().keys())

    def items(self) -> Iterator[tuple[str, "JsonValue"]]:
        for key, value in self.as_object().items():
            yield key, JsonValue(value, f"{self.path}.{key}")

    def __iter__(self) -> Iterator["JsonValue"]:
        for index, value in enumerate(self.as_array()):
            yield JsonValue(value, f"{self.path}[{index}]")

    def __len__(self) -> int:
        if self.kind == JsonKind.OBJECT:
            return len(self.raw)
        return len(self.as_array())
