"""Field mapping for ``token_sum`` fields."""

from token_sum_field.mapper.analyzers import AnalyzerRegistry, NamedAnalyzer
from token_sum_field.mapper.contracts import FieldMapper, ParseContext, ParserContext
from token_sum_field.mapper.field_config import FieldConfig, merge_field_config, parse_field
from token_sum_field.mapper.mappings import TYPE_PARSERS, FieldMappings, parse_field_mapper
from token_sum_field.mapper.numeric import (
    IndexableField,
    IntPoint,
    NumberType,
    SortedNumericDocValuesField,
    StoredField,
)
from token_sum_field.mapper.token_sum import (
    CONTENT_TYPE,
    FORMAT_ERROR_VALUE,
    TokenSumFieldMapper,
    TokenSumResult,
    calculate_sum,
    sum_tokens,
)


__all__ = [
    "CONTENT_TYPE",
    "FORMAT_ERROR_VALUE",
    "TYPE_PARSERS",
    "AnalyzerRegistry",
    "FieldConfig",
    "FieldMapper",
    "FieldMappings",
    "IndexableField",
    "IntPoint",
    "NamedAnalyzer",
    "NumberType",
    "ParseContext",
    "ParserContext",
    "SortedNumericDocValuesField",
    "StoredField",
    "TokenSumFieldMapper",
    "TokenSumResult",
    "calculate_sum",
    "merge_field_config",
    "parse_field",
    "parse_field_mapper",
    "sum_tokens",
]
