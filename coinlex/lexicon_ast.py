from dataclasses import dataclass, field
from typing import Optional, Union

from coinlex.extractor import CoinExtractor, build
from coinlex.validator import LanguageValidator, build_validator
from coinlex.variants import DEFAULT_DELIMITERS, DelimiterPair

# === Statements ===


@dataclass(frozen=True)
class Version:
    """Represents the lexicon version."""

    value: str


@dataclass(frozen=True)
class Import:
    """Appends the entries of a list file to a named list."""

    path: str
    alias: str


@dataclass(frozen=True)
class ListDef:
    """Appends inline entries to a named list."""

    name: str
    items: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DelimiterDef:
    """Declares one delimiter pair."""

    left: str
    right: str


Statement = Union[Import, ListDef, DelimiterDef]


# === Top-Level Root Structure ===


@dataclass(frozen=True)
class Root:
    """Represents the parsed lexicon file."""

    version: Version
    statements: tuple[Statement, ...]
    lexicon_file_path: Optional[str] = None


# === Resolved configuration ===


@dataclass(frozen=True)
class Lexicon:
    """Coin vocabulary, language tags and delimiter pairs ready for building."""

    coins: tuple[str, ...]
    languages: tuple[str, ...]
    delimiters: tuple[DelimiterPair, ...] = DEFAULT_DELIMITERS

    def build_extractor(self) -> CoinExtractor:
        return build(self.coins, self.delimiters)

    def build_validator(self) -> LanguageValidator:
        return build_validator(self.languages)
