"""
coinlex - lexical matching engine for crypto news.

- variants: delimiter-wrapped pattern generation
- automaton: case-insensitive multi-pattern matcher
- resolver: pattern hit -> canonical entity resolution
- extractor: CoinExtractor facade (extract coins from text)
- validator: LanguageValidator facade (language tag membership)
- lexicon_*: lexicon file grammar, AST, transformer and parser
- records, pipeline: newsdata.io records and article enrichment
"""

from .automaton import Automaton, Hit
from .errors import (
    CoinLexError,
    CompilationError,
    ConfigurationError,
    EngineStateError,
    FeedError,
    InternalInvariantViolation,
)
from .extractor import CoinExtractor, build
from .resolver import CanonicalResolver, ResolvedEntity
from .validator import LanguageValidator, build_validator
from .variants import DEFAULT_DELIMITERS, DelimiterPair, PatternTable, generate_variants

__version__ = "0.1.0"

__all__ = [
    "Automaton",
    "CanonicalResolver",
    "CoinExtractor",
    "CoinLexError",
    "CompilationError",
    "ConfigurationError",
    "DEFAULT_DELIMITERS",
    "DelimiterPair",
    "EngineStateError",
    "FeedError",
    "Hit",
    "InternalInvariantViolation",
    "LanguageValidator",
    "PatternTable",
    "ResolvedEntity",
    "build",
    "build_validator",
    "generate_variants",
]
