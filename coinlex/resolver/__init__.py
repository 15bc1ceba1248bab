"""
Canonical resolution of automaton hits.

- core: ResolvedEntity data structure
- canonical: CanonicalResolver, mapping pattern hits back to entities
"""

from .canonical import CanonicalResolver
from .core import ResolvedEntity

__all__ = [
    "CanonicalResolver",
    "ResolvedEntity",
]
