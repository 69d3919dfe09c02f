"""JSON type aliases shared across the package."""

from __future__ import annotations

from typing import Any, Mapping, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]  # Any for recursive slots
JsonDict = dict[str, Any]
JsonMapping = Mapping[str, Any]
