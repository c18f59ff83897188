"""Named analyzers used by token_sum fields.

Follows Whoosh's composable tokenizer/filter design: a tokenizer yields
:class:`Token` objects and filters transform the stream. A field never owns an
analyzer; it holds a :class:`NamedAnalyzer` handle looked up by name in an
:class:`AnalyzerRegistry` that many fields share.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
import logging
import re
from typing import Protocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """Represents a token emitted by analyzers."""

    text: str


class Analyzer(Protocol):
    """Protocol implemented by analyzers and tokenizers: text in, tokens out."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields one token per match."""

    def __init__(self, pattern: str = r"[\w']+", flags: int = re.UNICODE | re.MULTILINE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for match in self.pattern.finditer(text):
            yield Token(match.group(0))


class SplitTokenizer:
    """Tokenizer that splits on a separator pattern and trims each piece.

    Empty pieces are dropped, so ``"1,,2"`` yields two tokens.
    """

    def __init__(self, separator: str = r"\s+") -> None:
        self.separator = re.compile(separator)

    def __call__(self, text: str) -> Iterator[Token]:
        for piece in self.separator.split(text):
            stripped = piece.strip()
            if stripped:
                yield Token(stripped)


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield Token(token.text.lower())


DEFAULT_STOPWORDS = [
    "a",
    "an",
    "and",
    "are",
    "as",
    "at",
    "be",
    "but",
    "by",
    "for",
    "if",
    "in",
    "into",
    "is",
    "it",
    "no",
    "not",
    "of",
    "on",
    "or",
    "such",
    "that",
    "the",
    "their",
    "then",
    "there",
    "these",
    "they",
    "this",
    "to",
    "was",
    "will",
    "with",
]


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = {word.lower() for word in vocab}

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.lower() not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters).

    Unlike an eager analyzer this stays lazy: tokens are produced as the
    caller iterates, so a consumer that stops early never analyzes the rest.
    """

    def __init__(self, tokenizer: Analyzer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> Iterator[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        yield from stream


class KeywordAnalyzer:
    """Analyzer that treats the entire input as a single token."""

    def __call__(self, text: str) -> Iterator[Token]:
        if text:
            yield Token(text)


class StandardAnalyzer:
    """Word tokens, lowercased, stopwords removed."""

    def __init__(self, *, stopwords: Sequence[str] | None = None) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), [LowercaseFilter(), StopFilter(stopwords)])

    def __call__(self, text: str) -> Iterator[Token]:
        return self.pipeline(text)


@dataclass(frozen=True)
class NamedAnalyzer:
    """A registered analyzer together with the name it was registered under.

    Equality and hashing only consider the name, so two handles obtained from
    the same registry compare equal.
    """

    name: str
    analyzer: Analyzer = field(compare=False, repr=False)

    def token_stream(self, field_name: str, text: str) -> Iterator[str]:
        """Lazily yield the token strings for ``text`` indexed under ``field_name``."""
        logger.debug("Analyzing field [%s] with analyzer [%s]", field_name, self.name)
        for token in self.analyzer(text):
            yield token.text


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "standard": lambda: StandardAnalyzer(),
    "simple": lambda: AnalyzerPipeline(RegexTokenizer(r"[^\W\d_]+"), [LowercaseFilter()]),
    "whitespace": lambda: AnalyzerPipeline(SplitTokenizer(r"\s+")),
    "comma": lambda: AnalyzerPipeline(SplitTokenizer(r",")),
    "keyword": lambda: KeywordAnalyzer(),
}


class AnalyzerRegistry:
    """Index-level registry of named analyzers."""

    def __init__(self, analyzers: dict[str, Analyzer] | None = None) -> None:
        self._analyzers: dict[str, NamedAnalyzer] = {}
        for name, analyzer in (analyzers or {}).items():
            self.register(name, analyzer)

    @classmethod
    def with_defaults(cls) -> AnalyzerRegistry:
        """Build a registry holding every built-in analyzer."""
        return cls({name: factory() for name, factory in _ANALYZER_FACTORIES.items()})

    def register(self, name: str, analyzer: Analyzer) -> NamedAnalyzer:
        if not name:
            raise ValueError("Analyzer name must not be empty")
        named = NamedAnalyzer(name=name, analyzer=analyzer)
        self._analyzers[name] = named
        return named

    def get(self, name: str) -> NamedAnalyzer | None:
        """Return the analyzer registered as ``name`` or ``None``."""
        return self._analyzers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._analyzers

    def __len__(self) -> int:
        return len(self._analyzers)

    def names(self) -> list[str]:
        return sorted(self._analyzers)
