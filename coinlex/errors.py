"""
Error types raised by the coinlex matching engine.

Build-time failures (bad vocabulary, automaton construction) are raised to
the caller so a surrounding pipeline can log them and skip a run. Scan-time
operations never raise for ordinary input.
"""


class CoinLexError(Exception):
    """Base class for all coinlex errors."""


class ConfigurationError(CoinLexError, ValueError):
    """Empty or invalid vocabulary, tag list, delimiter set or lexicon file."""


class CompilationError(CoinLexError):
    """The multi-pattern automaton could not be built from the given patterns."""


class InternalInvariantViolation(CoinLexError, AssertionError):
    """A matched pattern index fell outside the canonical entity table."""


class EngineStateError(CoinLexError, RuntimeError):
    """An extractor was used before its automaton was built."""


class FeedError(CoinLexError):
    """A news feed response could not be interpreted."""
