"""
Core data structures for the coinlex resolver.
"""

from dataclasses import dataclass


@dataclass
class ResolvedEntity:
    """A canonical entity found in one scan."""

    entity: str
    entity_index: int
    offset: int
    occurrences: int = 1
