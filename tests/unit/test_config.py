"""Unit tests for the config module."""

import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from token_sum_field.config import Settings


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_values_come_from_environment(self):
        settings = Settings()

        assert settings.service_name == "token-sum-field-tests"
        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.tracing_enabled is False
        assert settings.logger_levels == {}

    @patch.dict(os.environ, {"TOKEN_SUM_LOG_LEVEL": "DEBUG"}, clear=False)
    def test_log_level_is_case_insensitive(self):
        assert Settings().log_level == "debug"

    @patch.dict(os.environ, {"TOKEN_SUM_LOG_LEVEL": "verbose"}, clear=False)
    def test_invalid_log_level_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings()

    @patch.dict(os.environ, {"TOKEN_SUM_LOGGER_LEVELS": '{"token_sum_field.mapper": "debug"}'}, clear=False)
    def test_logger_levels_parse_from_json(self):
        assert Settings().logger_levels == {"token_sum_field.mapper": "debug"}

    def test_explicit_values_override_environment(self):
        settings = Settings(service_name="custom", tracing_enabled=True)

        assert settings.service_name == "custom"
        assert settings.tracing_enabled is True

    def test_service_name_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            Settings(service_name="")

    @patch.dict(
        os.environ,
        {"TOKEN_SUM_TRACE_CATEGORIES": '["token_sum_field.mapper"]', "TOKEN_SUM_TRACE_LEVEL": "INFO"},
        clear=False,
    )
    def test_trace_categories_parse_from_json(self):
        settings = Settings()

        assert settings.trace_categories == ["token_sum_field.mapper"]
        assert settings.trace_level == "info"

    def test_trace_categories_default_to_empty(self):
        settings = Settings()

        assert settings.trace_categories == []
        assert settings.trace_level == "debug"
