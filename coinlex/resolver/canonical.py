"""
Canonical resolution for coinlex.

Turns the raw hit stream of one scan into the set of distinct canonical
entities it mentions. Many delimiter variants alias the same entity, and the
same entity may occur many times; each entity is reported once.
"""

import logging
from typing import Dict, Iterable, List, Set

from ..automaton import Hit
from ..variants import PatternTable
from .core import ResolvedEntity

logger = logging.getLogger(__name__)


class CanonicalResolver:
    """
    Maps pattern hits to canonical entities and deduplicates them.

    Holds only the read-only pattern table, so a single instance serves any
    number of concurrent scans.
    """

    def __init__(self, table: PatternTable):
        self.table = table

    def resolve(self, hits: Iterable[Hit]) -> List[ResolvedEntity]:
        """
        Resolve the hits of a single scan.

        Args:
            hits: Hits in scan order

        Returns:
            One ResolvedEntity per distinct entity, ordered by the offset of
            its first hit

        Raises:
            InternalInvariantViolation: if a hit carries a pattern index the
                table does not know (extractor wiring error)
        """
        found: Dict[str, ResolvedEntity] = {}
        total = 0
        for hit in hits:
            total += 1
            index = self.table.entity_index(hit.pattern_index)
            entity = self.table.entities[index]
            resolved = found.get(entity)
            if resolved is None:
                found[entity] = ResolvedEntity(
                    entity=entity, entity_index=index, offset=hit.start
                )
            else:
                resolved.occurrences += 1
                resolved.offset = min(resolved.offset, hit.start)

        logger.debug("Resolved %s hits to %s entities", total, len(found))
        return sorted(found.values(), key=lambda r: (r.offset, r.entity_index))

    def resolve_names(self, hits: Iterable[Hit]) -> Set[str]:
        """Resolve hits to the set of canonical entity strings."""
        return {resolved.entity for resolved in self.resolve(hits)}
