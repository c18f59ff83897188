"""Field mappings: a set of field mappers keyed by name.

Parses a ``properties`` block by dispatching each field to the parser
registered for its ``type``, merges schema updates, turns documents into
indexable fields and serializes back to configuration form.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
import logging
from typing import Any

from opentelemetry.trace import SpanKind

from token_sum_field.errors import MapperParsingError
from token_sum_field.mapper.contracts import FieldMapper, ParseContext, ParserContext
from token_sum_field.mapper.numeric import IndexableField
from token_sum_field.mapper.token_sum import TokenSumFieldMapper
from token_sum_field.observability.metrics import DOCUMENT_INDEX_LATENCY, track_latency
from token_sum_field.observability.tracing import create_span


logger = logging.getLogger(__name__)

TypeParser = Callable[[str, MutableMapping[str, Any], ParserContext], FieldMapper]

TYPE_PARSERS: dict[str, TypeParser] = {
    TokenSumFieldMapper.content_type: TokenSumFieldMapper.parse,
}


def check_no_remaining_fields(name: str, node: Mapping[str, Any]) -> None:
    """Reject configuration keys no parser consumed."""
    if node:
        remaining = ", ".join(f"{key} : {value}" for key, value in node.items())
        raise MapperParsingError(f"Mapping definition for [{name}] has unsupported parameters:  [{remaining}]")


def parse_field_mapper(name: str, raw: Any, context: ParserContext) -> FieldMapper:
    """Parse one field definition; ``raw`` itself is left untouched."""
    if not isinstance(raw, Mapping):
        raise MapperParsingError(f"Expected map for field [{name}] but got a {type(raw).__name__}")
    node = dict(raw)
    type_name = node.get("type")
    if type_name is None:
        raise MapperParsingError(f"No type specified for field [{name}]")
    parser = TYPE_PARSERS.get(type_name) if isinstance(type_name, str) else None
    if parser is None:
        raise MapperParsingError(f"No handler for type [{type_name}] declared on field [{name}]")
    mapper = parser(name, node, context)
    check_no_remaining_fields(name, node)
    return mapper


@dataclass(frozen=True)
class FieldMappings:
    """Immutable collection of field mappers.

    Example:
        mappings = FieldMappings.parse(
            {"codes": {"type": "token_sum", "analyzer": "comma", "null_value": 0}},
            ParserContext(),
        )
        fields = mappings.index_document({"codes": "3,4,5"})
    """

    mappers: Mapping[str, FieldMapper] = field(default_factory=dict)

    @classmethod
    def parse(cls, properties: Mapping[str, Any], context: ParserContext) -> FieldMappings:
        mappers = {name: parse_field_mapper(name, raw, context) for name, raw in properties.items()}
        logger.info("Parsed %d field mappers", len(mappers))
        return cls(mappers=mappers)

    def __getitem__(self, name: str) -> FieldMapper:
        return self.mappers[name]

    def __contains__(self, name: object) -> bool:
        return name in self.mappers

    def __iter__(self) -> Iterator[FieldMapper]:
        return iter(self.mappers.values())

    def __len__(self) -> int:
        return len(self.mappers)

    def merge(self, update: FieldMappings) -> FieldMappings:
        """Return new mappings with ``update`` applied.

        Fields present on both sides are merged; new fields are added. Any
        :class:`~token_sum_field.errors.MergeError` leaves ``self`` unchanged.
        """
        merged: dict[str, FieldMapper] = dict(self.mappers)
        for name, mapper in update.mappers.items():
            current = merged.get(name)
            merged[name] = mapper if current is None else current.merge(mapper)
        return FieldMappings(mappers=merged)

    def index_document(
        self,
        document: Mapping[str, Any],
        *,
        external_values: Mapping[str, Any] | None = None,
    ) -> dict[str, list[IndexableField]]:
        """Run every mapper over ``document``.

        A missing key or ``None`` is an absent value. Lists produce one set of
        representations per element; objects are rejected. ``external_values``
        override what the document holds for the named fields.
        """
        overrides = external_values or {}
        result: dict[str, list[IndexableField]] = {}
        with (
            create_span(
                "mapping.index_document",
                kind=SpanKind.INTERNAL,
                attributes={"mapping.field_count": len(self.mappers)},
            ),
            track_latency(DOCUMENT_INDEX_LATENCY, operation="index_document"),
        ):
            for name, mapper in self.mappers.items():
                if name in overrides:
                    contexts = [ParseContext.external(overrides[name])]
                else:
                    contexts = [ParseContext.of(_text_or_none(name, v)) for v in _values(document.get(name))]
                result[name] = [f for context in contexts for f in mapper.create_fields(context)]
        return result

    def to_dict(self, *, include_defaults: bool = False) -> dict[str, Any]:
        return {
            "properties": {
                name: mapper.to_dict(include_defaults=include_defaults) for name, mapper in self.mappers.items()
            }
        }


def _values(raw: Any) -> list[Any]:
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def _text_or_none(name: str, value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        raise MapperParsingError(f"Field [{name}] expects a text value but the document holds an object")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
