"""
Coin extraction facade.

Composes the variant generator (once, at construction), the automaton (built
once, scanned per call) and the canonical resolver (per call) into a single
``extract(text)`` operation.

An extractor has two states. It is *uninitialized* once the vocabulary has
been validated and expanded, and *ready* once ``build()`` has compiled the
automaton. A ready extractor stays ready; a different vocabulary needs a new
extractor.
"""

import logging
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Sequence, Set

from .automaton import Automaton, Hit, encode
from .errors import EngineStateError
from .resolver import CanonicalResolver, ResolvedEntity
from .variants import PatternTable, generate_variants

logger = logging.getLogger(__name__)

# Text edges behave like whitespace
BOUNDARY = " "


class CoinExtractor:
    """Extracts canonical coin identifiers mentioned in free-form text."""

    def __init__(
        self,
        vocabulary: Iterable[str],
        delimiters: Optional[Iterable[Sequence[str]]] = None,
    ):
        """
        Validate and expand the vocabulary.

        Raises:
            ConfigurationError: for an empty or invalid vocabulary or delimiter set
        """
        self.table: PatternTable = generate_variants(vocabulary, delimiters)
        self.resolver = CanonicalResolver(self.table)
        self._automaton: Optional[Automaton] = None

    @property
    def entities(self):
        return self.table.entities

    @property
    def is_ready(self) -> bool:
        return self._automaton is not None

    def build(self) -> "CoinExtractor":
        """
        Compile the automaton. Calling it again on a ready extractor does nothing.

        Raises:
            CompilationError: if the automaton cannot be built
        """
        if self._automaton is None:
            self._automaton = Automaton(self.table.patterns)
            logger.info(
                "Coin extractor ready: %s entities, %s delimiter pairs, %s patterns",
                len(self.table.entities),
                len(self.table.delimiters),
                len(self.table),
            )
        return self

    def _require_automaton(self) -> Automaton:
        if self._automaton is None:
            raise EngineStateError("Coin extractor used before build()")
        return self._automaton

    def scan(self, text: str) -> Iterator[Hit]:
        """
        Yield raw pattern hits in ``text``, ordered by start offset.

        Spans are byte offsets into the UTF-8 encoding of ``text``; lone
        surrogates count as three bytes each. A span may
        include the delimiter characters around the entity.
        """
        automaton = self._require_automaton()
        if not text:
            return
        limit = len(encode(text))
        for hit in automaton.scan(f"{BOUNDARY}{text}{BOUNDARY}"):
            yield replace(
                hit,
                start=max(hit.start - len(BOUNDARY), 0),
                end=min(hit.end - len(BOUNDARY), limit),
            )

    def extract_entities(self, text: str) -> List[ResolvedEntity]:
        """Resolve the hits in ``text`` to entities, ordered by first occurrence."""
        return self.resolver.resolve(self.scan(text))

    def extract(self, text: str) -> Set[str]:
        """Return the set of canonical entities mentioned in ``text``."""
        return self.resolver.resolve_names(self.scan(text))


def build(
    vocabulary: Iterable[str],
    delimiters: Optional[Iterable[Sequence[str]]] = None,
) -> CoinExtractor:
    """
    Build a ready CoinExtractor.

    Raises:
        ConfigurationError: for an empty or invalid vocabulary or delimiter set
        CompilationError: if the automaton cannot be built
    """
    return CoinExtractor(vocabulary, delimiters).build()
