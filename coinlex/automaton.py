"""
Multi-pattern automaton used by the coinlex extractor and validator.

Wraps a pyahocorasick Aho-Corasick automaton. Patterns and haystacks are
folded with ``bytes.lower()`` (ASCII letters only) and viewed one byte per
character, so reported offsets are byte offsets into the UTF-8 encoding of
the scanned text and a multi-byte character can never take part in a match
of an ASCII pattern.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import ahocorasick

from .errors import CompilationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hit:
    """One occurrence of a pattern: ``haystack_bytes[start:end]``."""

    pattern_index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def encode(text: str) -> bytes:
    """UTF-8 encode, passing lone surrogates through as three bytes each."""
    return text.encode("utf-8", errors="surrogatepass")


def fold(text: str) -> str:
    """ASCII case fold, returned as a one-char-per-byte string."""
    return encode(text).lower().decode("latin-1")


class Automaton:
    """
    Case-insensitive matcher over a fixed list of patterns.

    Built once; never modified afterwards, so any number of scans can share
    one instance.
    """

    def __init__(self, patterns: Sequence[str]):
        """
        Compile the patterns.

        Args:
            patterns: Pattern strings; the position of each one is the
                ``pattern_index`` reported in hits

        Raises:
            CompilationError: if the list is empty or holds an empty or
                non-string pattern, or if the backend rejects the input
        """
        if not patterns:
            raise CompilationError("Cannot build an automaton from an empty pattern list")

        automaton = ahocorasick.Automaton()
        max_length = 0
        try:
            for index, pattern in enumerate(patterns):
                if not isinstance(pattern, str):
                    raise CompilationError(
                        f"Pattern {index} is not a string: {pattern!r}"
                    )
                if not pattern:
                    raise CompilationError(f"Pattern {index} is empty")
                key = fold(pattern)
                if key in automaton:
                    # First registration keeps the key
                    kept, _ = automaton.get(key)
                    logger.warning(
                        "Pattern %s (%r) is shadowed by identical pattern %s and will never be reported",
                        index,
                        pattern,
                        kept,
                    )
                    continue
                automaton.add_word(key, (index, len(key)))
                max_length = max(max_length, len(key))
            automaton.make_automaton()
        except (TypeError, ValueError) as e:
            raise CompilationError(f"Failed to build automaton: {e}") from e

        self._automaton = automaton
        self._max_length = max_length
        self.pattern_count = len(patterns)
        logger.info("Compiled automaton with %s patterns", self.pattern_count)

    def scan(self, text: str) -> Iterator[Hit]:
        """
        Yield every hit in ``text``, ordered by start offset.

        The backend reports hits by end position. A hit is held back only
        until no later hit can start before it, which is at most the length
        of the longest pattern.
        """
        if not text:
            return
        pending: List[Tuple[int, int, int]] = []
        for last, (pattern_index, length) in self._automaton.iter(fold(text)):
            heapq.heappush(pending, (last - length + 1, last + 1, pattern_index))
            horizon = last - self._max_length + 1
            while pending and pending[0][0] < horizon:
                start, end, index = heapq.heappop(pending)
                yield Hit(pattern_index=index, start=start, end=end)
        while pending:
            start, end, index = heapq.heappop(pending)
            yield Hit(pattern_index=index, start=start, end=end)

    def is_match(self, text: str) -> bool:
        """True if any pattern occurs in ``text``."""
        if not text:
            return False
        for _ in self._automaton.iter(fold(text)):
            return True
        return False
