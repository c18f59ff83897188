"""Shared contexts and the capability set every field mapper provides."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from token_sum_field.mapper.analyzers import AnalyzerRegistry
from token_sum_field.mapper.numeric import IndexableField


@dataclass
class ParserContext:
    """Index-level services available while parsing field configuration."""

    analyzers: AnalyzerRegistry = field(default_factory=AnalyzerRegistry.with_defaults)


@dataclass(frozen=True)
class ParseContext:
    """The value of one field in one document.

    ``text`` is what was extracted from the document (``None`` when the
    document has no value). An external value, when set, replaces the
    extracted text; composite fields use it to feed derived values through.
    """

    text: str | None = None
    external_value: Any = None
    external_value_set: bool = False

    @classmethod
    def of(cls, text: str | None) -> ParseContext:
        return cls(text=text)

    @classmethod
    def external(cls, value: Any) -> ParseContext:
        return cls(external_value=value, external_value_set=True)

    def value(self) -> str | None:
        """Return the effective text value, preferring the external override."""
        if self.external_value_set:
            return None if self.external_value is None else str(self.external_value)
        return self.text


class FieldMapper(Protocol):
    """Build, encode, merge and serialize one field."""

    content_type: str

    @property
    def name(self) -> str:  # pragma: no cover - interface definition
        ...

    @classmethod
    def parse(
        cls, name: str, node: MutableMapping[str, Any], context: ParserContext
    ) -> FieldMapper:  # pragma: no cover - interface definition
        ...

    def create_fields(self, context: ParseContext) -> list[IndexableField]:  # pragma: no cover - interface definition
        ...

    def merge(self, other: FieldMapper) -> FieldMapper:  # pragma: no cover - interface definition
        ...

    def to_dict(self, *, include_defaults: bool = False) -> dict[str, Any]:  # pragma: no cover - interface definition
        ...
