"""Unit tests for field mappings: parsing, merging and document indexing."""

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
import pytest

from token_sum_field.errors import MapperParsingError, MergeError, UndefinedValueError
from token_sum_field.mapper.mappings import TYPE_PARSERS, FieldMappings, check_no_remaining_fields
from token_sum_field.mapper.numeric import IntPoint, SortedNumericDocValuesField
from token_sum_field.mapper.token_sum import TokenSumFieldMapper
from token_sum_field.observability import tracing as tracing_module


PROPERTIES = {
    "codes": {"type": "token_sum", "analyzer": "whitespace"},
    "tags": {"type": "token_sum", "analyzer": "comma", "null_value": 0, "doc_values": False},
}


@pytest.fixture
def mappings(parser_context) -> FieldMappings:
    return FieldMappings.parse(PROPERTIES, parser_context)


@pytest.fixture
def span_exporter(monkeypatch) -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setitem(tracing_module._tracer_holder, "tracer", provider.get_tracer("tests"))
    return exporter


@pytest.mark.unit
class TestParse:
    def test_parse_builds_one_mapper_per_field(self, mappings):
        assert len(mappings) == 2
        assert "codes" in mappings
        assert isinstance(mappings["tags"], TokenSumFieldMapper)
        assert [m.name for m in mappings] == ["codes", "tags"]

    def test_parse_does_not_mutate_input(self, parser_context):
        properties = {"codes": {"type": "token_sum", "analyzer": "whitespace", "null_value": 1}}

        FieldMappings.parse(properties, parser_context)

        assert properties == {"codes": {"type": "token_sum", "analyzer": "whitespace", "null_value": 1}}

    def test_token_sum_is_registered(self):
        assert TYPE_PARSERS["token_sum"] == TokenSumFieldMapper.parse

    @pytest.mark.parametrize(
        ("raw", "message"),
        [
            ({"analyzer": "whitespace"}, r"No type specified for field \[codes\]"),
            ({"type": "geo_shape"}, r"No handler for type \[geo_shape\] declared on field \[codes\]"),
            (
                {"type": ["token_sum"], "analyzer": "whitespace"},
                r"No handler for type \[\['token_sum'\]\] declared on field \[codes\]",
            ),
            ("token_sum", r"Expected map for field \[codes\] but got a str"),
            (
                {"type": "token_sum", "analyzer": "whitespace", "ignore_malformed": True},
                r"Mapping definition for \[codes\] has unsupported parameters:  \[ignore_malformed : True\]",
            ),
        ],
    )
    def test_parse_errors(self, parser_context, raw, message):
        with pytest.raises(MapperParsingError, match=message):
            FieldMappings.parse({"codes": raw}, parser_context)

    def test_check_no_remaining_fields_accepts_empty(self):
        check_no_remaining_fields("codes", {})


@pytest.mark.unit
class TestIndexDocument:
    def test_each_mapper_encodes_its_value(self, mappings, span_exporter):
        result = mappings.index_document({"codes": "1 2 3", "tags": "4,5"})

        assert result == {
            "codes": [IntPoint("codes", 6), SortedNumericDocValuesField("codes", 6)],
            "tags": [IntPoint("tags", 9)],
        }

    def test_missing_value_falls_back_to_null_value(self, mappings, span_exporter):
        result = mappings.index_document({"codes": "7"})

        assert result["tags"] == [IntPoint("tags", 0)]

    def test_missing_value_without_null_value_fails(self, mappings, span_exporter):
        with pytest.raises(UndefinedValueError):
            mappings.index_document({"tags": "1"})

        (span,) = span_exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR

    def test_list_values_produce_fields_per_element(self, mappings, span_exporter):
        result = mappings.index_document({"codes": ["1 1", "x"], "tags": ["1,2", None]})

        assert [f.value for f in result["codes"]] == [2, 2, -1, -1]
        assert result["tags"] == [IntPoint("tags", 3), IntPoint("tags", 0)]

    def test_object_values_are_rejected(self, mappings, span_exporter):
        with pytest.raises(MapperParsingError, match=r"Field \[codes\] expects a text value"):
            mappings.index_document({"codes": {"nested": "1 2"}, "tags": "1"})

    def test_numbers_are_read_as_text(self, mappings, span_exporter):
        assert mappings.index_document({"codes": 12, "tags": 3})["codes"][0] == IntPoint("codes", 12)

    def test_external_values_override_document(self, mappings, span_exporter):
        result = mappings.index_document({"codes": "1", "tags": "1"}, external_values={"codes": "20 22"})

        assert result["codes"][0] == IntPoint("codes", 42)
        assert result["tags"] == [IntPoint("tags", 1)]

    def test_index_document_is_traced(self, mappings, span_exporter):
        mappings.index_document({"codes": "1"})

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "mapping.index_document"
        assert span.attributes["mapping.field_count"] == 2


@pytest.mark.unit
class TestMergeAndSerialize:
    def test_merge_updates_existing_and_adds_new_fields(self, mappings, parser_context):
        update = FieldMappings.parse(
            {
                "codes": {"type": "token_sum", "analyzer": "comma", "null_value": 3},
                "extra": {"type": "token_sum", "analyzer": "keyword"},
            },
            parser_context,
        )

        merged = mappings.merge(update)

        assert merged["codes"].analyzer.name == "comma"
        assert merged["codes"].null_value == 3
        assert "extra" in merged
        assert merged["tags"] is mappings["tags"]
        assert mappings["codes"].analyzer.name == "whitespace"

    def test_failed_merge_leaves_mappings_unchanged(self, mappings, parser_context):
        update = FieldMappings.parse({"tags": {"type": "token_sum", "analyzer": "comma"}}, parser_context)

        with pytest.raises(MergeError, match=r"different \[doc_values\] values"):
            mappings.merge(update)

        assert mappings["tags"].config.doc_values is False

    def test_to_dict_round_trip(self, mappings, parser_context):
        data = mappings.to_dict()

        assert data == {
            "properties": {
                "codes": {"type": "token_sum", "analyzer": "whitespace"},
                "tags": {"type": "token_sum", "doc_values": False, "null_value": 0, "analyzer": "comma"},
            }
        }
        assert FieldMappings.parse(data["properties"], parser_context) == mappings
