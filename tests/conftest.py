"""Shared test fixtures and configuration."""

from collections.abc import Iterator
import logging
import os

import pytest

from token_sum_field.mapper.analyzers import AnalyzerRegistry, NamedAnalyzer, Token
from token_sum_field.mapper.contracts import ParserContext


TEST_ENV = {
    "TOKEN_SUM_SERVICE_NAME": "token-sum-field-tests",
    "TOKEN_SUM_LOG_LEVEL": "info",
    "TOKEN_SUM_LOG_JSON": "true",
    "TOKEN_SUM_TRACING_ENABLED": "false",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset TOKEN_SUM_* variables to test defaults before each test."""
    for key in list(os.environ):
        if key.startswith("TOKEN_SUM_"):
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Undo configure_logging side effects on the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def analyzers() -> AnalyzerRegistry:
    return AnalyzerRegistry.with_defaults()


@pytest.fixture
def parser_context(analyzers) -> ParserContext:
    return ParserContext(analyzers=analyzers)


@pytest.fixture
def whitespace(analyzers) -> NamedAnalyzer:
    return analyzers.get("whitespace")


class BrokenAnalyzer:
    """Analyzer whose stream fails after yielding ``good`` tokens."""

    def __init__(self, good: int = 0) -> None:
        self.good = good

    def __call__(self, text: str) -> Iterator[Token]:
        for _ in range(self.good):
            yield Token("1")
        raise OSError("analyzer backend unavailable")


@pytest.fixture
def broken_analyzer() -> NamedAnalyzer:
    return NamedAnalyzer(name="broken", analyzer=BrokenAnalyzer(good=2))
