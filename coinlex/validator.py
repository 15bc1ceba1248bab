"""
Language tag validation.

A plain membership test over a small set of accepted tags, built on the same
automaton as the extractor but without delimiter variants or resolution.
"""

import logging
from typing import Iterable, Tuple

from .automaton import Automaton
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class LanguageValidator:
    """Answers whether a string contains any accepted tag, ignoring ASCII case."""

    def __init__(self, accepted_tags: Iterable[str]):
        if accepted_tags is None or isinstance(accepted_tags, (str, bytes)):
            raise ConfigurationError("Accepted tags must be a sequence of strings")
        tags = tuple(accepted_tags)
        if not tags:
            raise ConfigurationError("At least one accepted tag is required")
        for position, tag in enumerate(tags):
            if not isinstance(tag, str) or not tag.strip():
                raise ConfigurationError(f"Accepted tag {position} is blank: {tag!r}")

        self.accepted_tags: Tuple[str, ...] = tags
        self._automaton = Automaton(tags)
        logger.info("Language validator ready with %s tags", len(tags))

    def is_valid(self, text: str) -> bool:
        """True iff at least one accepted tag occurs in ``text``."""
        if not text:
            return False
        return self._automaton.is_match(text)


def build_validator(accepted_tags: Iterable[str]) -> LanguageValidator:
    """
    Build a LanguageValidator.

    Raises:
        ConfigurationError: for an empty or blank tag list
        CompilationError: if the automaton cannot be built
    """
    return LanguageValidator(accepted_tags)
