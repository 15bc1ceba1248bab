"""
Pattern variant generation for the coinlex extractor.

The automaton has no notion of a word boundary, so every canonical entity is
wrapped in a fixed set of delimiter pairs (space/space, space/period,
bracket/bracket, ...). A delimiter-wrapped variant only matches where the
entity stands on its own, never inside an unrelated word.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .automaton import fold
from .errors import ConfigurationError, InternalInvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DelimiterPair:
    """Characters placed on the left and right of an entity."""

    left: str
    right: str

    def wrap(self, entity: str) -> str:
        return f"{self.left}{entity}{self.right}"


DEFAULT_DELIMITERS: Tuple[DelimiterPair, ...] = (
    DelimiterPair(" ", " "),
    DelimiterPair(" ", "."),
    DelimiterPair("(", ","),
    DelimiterPair("(", " "),
    DelimiterPair(" ", ")"),
    DelimiterPair("(", ")"),
    DelimiterPair("[", ","),
    DelimiterPair("[", " "),
    DelimiterPair(" ", "]"),
    DelimiterPair("[", "]"),
)


@dataclass(frozen=True)
class PatternTable:
    """
    The flattened variant list together with its pattern -> entity mapping.

    Variants are laid out with the delimiter loop outermost and the entity
    loop innermost, so pattern ``i`` always belongs to entity
    ``i % len(entities)``. ``entity_indices`` records that mapping explicitly.
    """

    entities: Tuple[str, ...]
    delimiters: Tuple[DelimiterPair, ...]
    patterns: Tuple[str, ...]
    entity_indices: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.patterns)

    def entity_index(self, pattern_index: int) -> int:
        """
        Map a pattern index to the index of its canonical entity.

        Raises:
            InternalInvariantViolation: if the index is not a pattern of this table
        """
        if not 0 <= pattern_index < len(self.entity_indices):
            logger.error(
                "Pattern index %s outside table of %s patterns",
                pattern_index,
                len(self.entity_indices),
            )
            raise InternalInvariantViolation(
                f"Pattern index {pattern_index} is outside [0, {len(self.entity_indices)})"
            )
        return self.entity_indices[pattern_index]

    def entity_for(self, pattern_index: int) -> str:
        return self.entities[self.entity_index(pattern_index)]


def normalize_vocabulary(vocabulary: Iterable[str]) -> Tuple[str, ...]:
    """
    Validate a vocabulary and drop entries that repeat an earlier one.

    Entries are compared after ASCII case folding, since the automaton could
    not tell them apart anyway. The first spelling wins.

    Raises:
        ConfigurationError: for an empty vocabulary or a blank/non-string entry
    """
    if vocabulary is None or isinstance(vocabulary, (str, bytes)):
        raise ConfigurationError("Vocabulary must be a sequence of strings")

    entities: List[str] = []
    seen = set()
    for position, entity in enumerate(vocabulary):
        if not isinstance(entity, str):
            raise ConfigurationError(
                f"Vocabulary entry {position} is not a string: {entity!r}"
            )
        if not entity.strip():
            raise ConfigurationError(f"Vocabulary entry {position} is blank")
        key = fold(entity)
        if key in seen:
            logger.warning("Dropping duplicate vocabulary entry %r", entity)
            continue
        seen.add(key)
        entities.append(entity)

    if not entities:
        raise ConfigurationError("Vocabulary must not be empty")
    return tuple(entities)


def normalize_delimiters(
    delimiters: Optional[Iterable[Sequence[str]]],
) -> Tuple[DelimiterPair, ...]:
    """Coerce ``(left, right)`` pairs to DelimiterPair and validate the set."""
    if delimiters is None:
        return DEFAULT_DELIMITERS

    pairs: List[DelimiterPair] = []
    for item in delimiters:
        try:
            pair = item if isinstance(item, DelimiterPair) else DelimiterPair(*item)
        except TypeError as e:
            raise ConfigurationError(f"Invalid delimiter pair {item!r}: {e}") from e
        if not isinstance(pair.left, str) or not isinstance(pair.right, str):
            raise ConfigurationError(f"Delimiter pair must hold strings: {item!r}")
        if not pair.left and not pair.right:
            raise ConfigurationError("Delimiter pair must not be empty on both sides")
        if pair in pairs:
            raise ConfigurationError(f"Duplicate delimiter pair: {pair!r}")
        pairs.append(pair)

    if not pairs:
        raise ConfigurationError("At least one delimiter pair is required")
    return tuple(pairs)


def generate_variants(
    vocabulary: Iterable[str],
    delimiters: Optional[Iterable[Sequence[str]]] = None,
) -> PatternTable:
    """
    Expand a vocabulary into its flattened, delimiter-wrapped pattern list.

    Args:
        vocabulary: Ordered canonical entity strings
        delimiters: Ordered delimiter pairs (defaults to DEFAULT_DELIMITERS)

    Returns:
        PatternTable with ``len(entities) * len(delimiters)`` patterns

    Raises:
        ConfigurationError: for an empty or invalid vocabulary or delimiter set
    """
    entities = normalize_vocabulary(vocabulary)
    pairs = normalize_delimiters(delimiters)

    delimiter_chars = {ch for pair in pairs for ch in pair.left + pair.right}
    ambiguous = [e for e in entities if delimiter_chars.intersection(e)]
    if ambiguous:
        logger.warning("Entities containing delimiter characters: %s", ambiguous)

    patterns: List[str] = []
    entity_indices: List[int] = []
    for pair in pairs:
        for index, entity in enumerate(entities):
            patterns.append(pair.wrap(entity))
            entity_indices.append(index)

    logger.debug(
        "Generated %s variants for %s entities and %s delimiter pairs",
        len(patterns),
        len(entities),
        len(pairs),
    )
    return PatternTable(
        entities=entities,
        delimiters=pairs,
        patterns=tuple(patterns),
        entity_indices=tuple(entity_indices),
    )
