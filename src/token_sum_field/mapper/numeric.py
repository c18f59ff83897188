"""Numeric field encoding.

Turns an integer value into the low-level representations an index consumes:
a point for range queries, doc values for sorting/aggregations, and a stored
copy for retrieval. Mirrors the per-type ``create_fields`` contract of numeric
field types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

from token_sum_field.errors import ValueCoercionError


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_LITERAL = re.compile(r"[+-]?\d+")


class RepresentationKind(str, Enum):
    """Kinds of indexable representation produced for a numeric value."""

    POINT = "point"
    DOC_VALUES = "doc_values"
    STORED = "stored"


@dataclass(frozen=True)
class IndexableField:
    """Base class for one indexable representation of a field value."""

    name: str
    value: int

    @property
    def kind(self) -> RepresentationKind:  # pragma: no cover - overridden
        raise NotImplementedError

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "kind": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class IntPoint(IndexableField):
    """Indexed point used for exact and range queries."""

    @property
    def kind(self) -> RepresentationKind:
        return RepresentationKind.POINT


@dataclass(frozen=True)
class SortedNumericDocValuesField(IndexableField):
    """Column-oriented value used for sorting and aggregations."""

    @property
    def kind(self) -> RepresentationKind:
        return RepresentationKind.DOC_VALUES


@dataclass(frozen=True)
class StoredField(IndexableField):
    """Raw value kept for retrieval."""

    @property
    def kind(self) -> RepresentationKind:
        return RepresentationKind.STORED


def wrap_int32(value: int) -> int:
    """Reduce ``value`` to a signed 32-bit integer with two's complement wraparound."""
    return ((value - INT32_MIN) % 2**32) + INT32_MIN


def parse_int32(text: str) -> int:
    """Parse a base-10 signed integer literal that must fit in 32 bits.

    Digits may be any Unicode decimal digit, so ``"٣"`` and full-width
    ``"１２"`` parse as 3 and 12.

    Raises:
        ValueError: if ``text`` is not a plain literal (no whitespace, no
            underscores, no decimal point) or lies outside the int32 range.
    """
    if not _INTEGER_LITERAL.fullmatch(text):
        raise ValueError(f"For input string: {text!r}")
    value = int(text)
    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f"Value out of range for int32: {text!r}")
    return value


class NumberType(str, Enum):
    """Numeric types known to the encoder."""

    INTEGER = "integer"

    @property
    def min_value(self) -> int:
        return INT32_MIN

    @property
    def max_value(self) -> int:
        return INT32_MAX

    def coerce(self, field_name: str, value: object) -> int:
        """Coerce a configuration value (number or numeric string) to this type."""
        if isinstance(value, bool):
            raise ValueCoercionError(field_name, value, "booleans are not numbers")
        if isinstance(value, int):
            result = value
        elif isinstance(value, float):
            if not value.is_integer():
                raise ValueCoercionError(field_name, value, "value has a decimal part")
            result = int(value)
        elif isinstance(value, str):
            try:
                result = parse_int32(value.strip())
            except ValueError as exc:
                raise ValueCoercionError(field_name, value, str(exc)) from exc
        else:
            raise ValueCoercionError(field_name, value, f"unsupported type {type(value).__name__}")
        if result < self.min_value or result > self.max_value:
            raise ValueCoercionError(field_name, value, f"out of range for [{self.value}]")
        return result

    def create_fields(
        self,
        name: str,
        value: int,
        *,
        indexed: bool,
        doc_values: bool,
        stored: bool,
    ) -> list[IndexableField]:
        """Encode ``value`` into the representations selected by the flags."""
        fields: list[IndexableField] = []
        if indexed:
            fields.append(IntPoint(name, value))
        if doc_values:
            fields.append(SortedNumericDocValuesField(name, value))
        if stored:
            fields.append(StoredField(name, value))
        return fields
