"""Index a text field as the sum of its integer tokens."""

from token_sum_field.errors import (
    MapperError,
    MapperParsingError,
    MergeError,
    UndefinedValueError,
    ValueCoercionError,
)
from token_sum_field.mapper import (
    AnalyzerRegistry,
    FieldMappings,
    ParseContext,
    ParserContext,
    TokenSumFieldMapper,
    calculate_sum,
    sum_tokens,
)


__version__ = "0.1.0"

__all__ = [
    "AnalyzerRegistry",
    "FieldMappings",
    "MapperError",
    "MapperParsingError",
    "MergeError",
    "ParseContext",
    "ParserContext",
    "TokenSumFieldMapper",
    "UndefinedValueError",
    "ValueCoercionError",
    "__version__",
    "calculate_sum",
    "sum_tokens",
]
