"""Exception hierarchy for field mapping."""

from __future__ import annotations

from collections.abc import Sequence


class MapperError(Exception):
    """Base class for all mapper failures."""


class MapperParsingError(MapperError, ValueError):
    """Raised when a field configuration cannot be turned into a mapper."""


class ValueCoercionError(MapperParsingError):
    """Raised when a configured value cannot be coerced to the field's numeric type."""

    def __init__(self, field_name: str, value: object, reason: str) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"Failed to parse [{value!r}] for field [{field_name}]: {reason}")


class MergeError(MapperError):
    """Raised when two mappers for the same field cannot be merged."""

    def __init__(self, conflicts: Sequence[str]) -> None:
        self.conflicts = list(conflicts)
        super().__init__("Merge failed with failures {" + ", ".join(f"[{c}]" for c in self.conflicts) + "}")


class UndefinedValueError(MapperError):
    """Raised when a document has no value for a field and no null_value is configured."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Undefined numeric value for field [{field_name}]: no value supplied and no null_value set")
