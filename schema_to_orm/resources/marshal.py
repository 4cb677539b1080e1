"""
JSON marshaling helpers shared by the generated model classes.

Copied verbatim into the output package by schema_to_orm.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON, TypeDecorator

T = TypeVar("T")
S = TypeVar("S")

_HEX_PATTERN = re.compile(r"^0x([0-9a-fA-F]{2})*$")


class MarshalError(ValueError):
    """Raised when a JSON value does not have the expected shape."""


class UninitializedAccessError(RuntimeError):
    """Raised when a non-nullable property is read before being set."""


class UnknownDiscriminatorError(TypeError):
    """Raised when a union value carries an unknown `isTypeOf` tag."""


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise MarshalError(message)


class Marshal(Generic[T, S]):
    """Conversion pair between a typed value and its JSON representation."""

    def from_json(self, value: Any) -> T:
        raise NotImplementedError

    def to_json(self, value: T) -> S:
        raise NotImplementedError


class _String(Marshal[str, str]):
    def from_json(self, value: Any) -> str:
        _check(isinstance(value, str), f"invalid String: {value!r}")
        return value

    def to_json(self, value: str) -> str:
        return value


class _Int(Marshal[int, int]):
    def from_json(self, value: Any) -> int:
        _check(isinstance(value, int) and not isinstance(value, bool), f"invalid Int: {value!r}")
        return value

    def to_json(self, value: int) -> int:
        return value


class _Float(Marshal[float, float]):
    def from_json(self, value: Any) -> float:
        _check(isinstance(value, (int, float)) and not isinstance(value, bool), f"invalid Float: {value!r}")
        return value

    def to_json(self, value: float) -> float:
        return value


class _Boolean(Marshal[bool, bool]):
    def from_json(self, value: Any) -> bool:
        _check(isinstance(value, bool), f"invalid Boolean: {value!r}")
        return value

    def to_json(self, value: bool) -> bool:
        return value


class _BigInt(Marshal[int, str]):
    def from_json(self, value: Any) -> int:
        _check(isinstance(value, str), f"invalid BigInt: {value!r}")
        try:
            return int(value, 10)
        except ValueError:
            raise MarshalError(f"invalid BigInt: {value!r}") from None

    def to_json(self, value: int) -> str:
        return str(value)


class _DateTime(Marshal[datetime, str]):
    """ISO-8601 timestamps, exported in UTC with millisecond precision."""

    def from_json(self, value: Any) -> datetime:
        _check(isinstance(value, str), f"invalid DateTime: {value!r}")
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            raise MarshalError(f"invalid DateTime: {value!r}") from None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def to_json(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _Bytes(Marshal[bytes, str]):
    """Bytes as `0x`-prefixed hex strings."""

    def from_json(self, value: Any) -> bytes:
        _check(isinstance(value, str) and _HEX_PATTERN.match(value) is not None, f"invalid Bytes: {value!r}")
        return bytes.fromhex(value[2:])

    def to_json(self, value: bytes) -> str:
        return "0x" + value.hex()


STRING = _String()
ID = STRING
INT = _Int()
FLOAT = _Float()
BOOLEAN = _Boolean()
BIGINT = _BigInt()
DATETIME = _DateTime()
BYTES = _Bytes()


def from_list(value: Any, convert: Callable[[Any], T]) -> list[T]:
    _check(isinstance(value, list), f"invalid list: {value!r}")
    return [convert(item) for item in value]


def non_null(value: T | None) -> T:
    _check(value is not None, "non-nullable value is null")
    return value


class JsonColumn(TypeDecorator):
    """Structured column storing a marshaled value as JSON (JSONB on PostgreSQL).

    `to_json` runs on the write path and `from_json` on the read path.
    """

    impl = JSON
    cache_ok = True

    def __init__(self, to_json: Callable[[Any], Any], from_json: Callable[[Any], Any]):
        super().__init__(none_as_null=True)
        self.to_json = to_json
        self.from_json = from_json

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB(none_as_null=True))
        return dialect.type_descriptor(JSON(none_as_null=True))

    def process_bind_param(self, value, dialect):
        return self.to_json(value)

    def process_result_value(self, value, dialect):
        return self.from_json(value)
