"""The ``token_sum`` field type.

Takes a string, runs it through a named analyzer and indexes the sum of the
integer values of the tokens. Apart from where its value comes from, the field
behaves like a 32-bit ``integer`` field: the same flags, the same null_value
handling and the same indexable representations.

A value whose tokens do not all parse as integers is indexed as ``-1``. This is
lossy on purpose: the failure is not reported to the caller, and a real sum of
``-1`` cannot be told apart from it once indexed. :func:`sum_tokens` keeps the
distinction for callers that need it.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from contextlib import closing
from dataclasses import dataclass, replace
import logging
from typing import Any, ClassVar

from token_sum_field.errors import MapperParsingError, MergeError, UndefinedValueError
from token_sum_field.mapper.analyzers import NamedAnalyzer
from token_sum_field.mapper.contracts import FieldMapper, ParseContext, ParserContext
from token_sum_field.mapper.field_config import FieldConfig, merge_field_config, parse_field
from token_sum_field.mapper.numeric import IndexableField, NumberType, parse_int32, wrap_int32
from token_sum_field.observability.context import bind_field
from token_sum_field.observability.metrics import FIELDS_ENCODED, FORMAT_ERRORS


logger = logging.getLogger(__name__)

CONTENT_TYPE = "token_sum"
FORMAT_ERROR_VALUE = -1


@dataclass(frozen=True)
class TokenSumResult:
    """Outcome of summing one value: either a sum or a format error."""

    value: int = 0
    format_error: bool = False
    bad_token: str | None = None

    def as_int(self) -> int:
        return FORMAT_ERROR_VALUE if self.format_error else self.value


def sum_tokens(analyzer: NamedAnalyzer, field_name: str, text: str) -> TokenSumResult:
    """Sum the integer tokens ``analyzer`` produces for ``text``.

    The first token that is not a base-10 int32 literal stops the iteration and
    yields a format error. Accumulation wraps around at 32 bits. Errors raised
    by the analyzer itself propagate.
    """
    total = 0
    with closing(analyzer.token_stream(field_name, text)) as tokens:
        for token in tokens:
            try:
                number = parse_int32(token)
            except ValueError:
                return TokenSumResult(format_error=True, bad_token=token)
            total = wrap_int32(total + number)
    return TokenSumResult(value=total)


def calculate_sum(analyzer: NamedAnalyzer, field_name: str, text: str) -> int:
    """Integer sum of the token stream, or ``-1`` if any token is not an integer."""
    return sum_tokens(analyzer, field_name, text).as_int()


@dataclass(frozen=True)
class TokenSumFieldMapper:
    """Field mapper for ``token_sum`` fields.

    Args:
        config: Generic field flags and null_value
        analyzer: Shared handle to the analyzer that splits values into tokens
    """

    config: FieldConfig
    analyzer: NamedAnalyzer

    content_type: ClassVar[str] = CONTENT_TYPE
    number_type: ClassVar[NumberType] = NumberType.INTEGER

    def __post_init__(self) -> None:
        if self.analyzer is None:
            raise MapperParsingError(f"Analyzer must be set for field [{self.config.name}] but wasn't.")

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def null_value(self) -> int | None:
        return self.config.null_value

    @classmethod
    def parse(cls, name: str, node: MutableMapping[str, Any], context: ParserContext) -> TokenSumFieldMapper:
        """Build a mapper from its configuration mapping.

        ``analyzer`` and ``null_value`` are removed from ``node``, then the
        generic keys are consumed by :func:`parse_field`. Anything left over is
        for the caller to reject.
        """
        analyzer: NamedAnalyzer | None = None
        null_value: int | None = None
        for key in list(node):
            value = node[key]
            if key == "null_value":
                if value is None:
                    raise MapperParsingError(f"Property [null_value] cannot be null for field [{name}]")
                null_value = cls.number_type.coerce(name, value)
                del node[key]
            elif key == "analyzer":
                analyzer = context.analyzers.get(str(value))
                if analyzer is None:
                    raise MapperParsingError(f"Analyzer [{value}] not found for field [{name}]")
                del node[key]
        config = parse_field(name, node, null_value=null_value)
        if analyzer is None:
            raise MapperParsingError(f"Analyzer must be set for field [{name}] but wasn't.")
        return cls(config=config, analyzer=analyzer)

    def create_fields(self, context: ParseContext) -> list[IndexableField]:
        """Encode this field's value in one document."""
        with bind_field(self.name):
            token_sum, source = self._resolve_value(context)
        FIELDS_ENCODED.labels(field=self.name, source=source).inc()
        return self.number_type.create_fields(
            self.name,
            token_sum,
            indexed=self.config.index,
            doc_values=self.config.doc_values,
            stored=self.config.store,
        )

    def _resolve_value(self, context: ParseContext) -> tuple[int, str]:
        value = context.value()
        if value is None:
            if self.null_value is None:
                raise UndefinedValueError(self.name)
            return self.null_value, "null_value"

        result = sum_tokens(self.analyzer, self.name, value)
        if result.format_error:
            logger.debug(
                "Token [%s] of field [%s] is not an integer; indexing %d",
                result.bad_token,
                self.name,
                FORMAT_ERROR_VALUE,
            )
            FORMAT_ERRORS.labels(field=self.name).inc()
        return result.as_int(), "external" if context.external_value_set else "text"

    def merge(self, other: FieldMapper) -> TokenSumFieldMapper:
        """Return a new mapper combining this one with ``other``.

        The analyzer is taken from ``other`` as is; the two analyzers are not
        compared.
        """
        other_type = getattr(other, "content_type", type(other).__name__)
        if not isinstance(other, TokenSumFieldMapper):
            conflict = (
                f"mapper [{self.name}] of different type, "
                f"current_type [{self.content_type}], merged_type [{other_type}]"
            )
            raise MergeError([conflict])
        config = merge_field_config(self.config, other.config, current_type=self.content_type, update_type=other_type)
        return replace(self, config=config, analyzer=other.analyzer)

    def to_dict(self, *, include_defaults: bool = False) -> dict[str, Any]:
        data = self.config.to_dict(self.content_type, include_defaults=include_defaults)
        data["analyzer"] = self.analyzer.name
        return data
