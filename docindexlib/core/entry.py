"""PathEntry: one discovered node plus the route that led to it."""

import unicodedata
from dataclasses import dataclass
from typing import Tuple
from .node import DocumentNode


@dataclass(frozen=True)
class PathEntry:
    """Immutable record of a node and its ancestor chain.

    ``ancestors`` runs from the traversal root to the immediate parent and
    excludes ``node``; it is empty for the root itself. Two entries are
    equal when their routes are equal.
    """

    node: DocumentNode
    ancestors: Tuple[DocumentNode, ...] = ()

    def __post_init__(self):
        # Callers may hand in lists; keep the record hashable and immutable
        object.__setattr__(self, 'ancestors', tuple(self.ancestors))

    @property
    def full_route(self) -> Tuple[DocumentNode, ...]:
        """Root-to-node route, node included. Never empty."""
        return self.ancestors + (self.node,)

    @property
    def depth(self) -> int:
        """Depth of ``node`` below the traversal root (root = 0)."""
        return len(self.ancestors)

    def route_names(self) -> Tuple[str, ...]:
        return tuple(n.name() for n in self.full_route)

    def joined_path(self, separator: str) -> str:
        """Return the route's display names joined by ``separator``."""
        return separator.join(self.route_names())

    def sort_key(self) -> Tuple[Tuple[str, str, str], ...]:
        """Collation key for ordering entries by full path.

        Routes compare segment by segment, so an entry always sorts
        directly after its parent and before the parent's later siblings,
        whatever separator the report displays.
        """
        return tuple(collation_key(name) for name in self.route_names())

    def __repr__(self) -> str:
        return f"PathEntry({' / '.join(self.route_names())!r})"


def collation_key(name: str) -> Tuple[str, str, str]:
    """Alphabetical key for one name, independent of the process locale.

    Compares case- and accent-insensitively first ("apple" < "Été" <
    "Zebra"), then by accents, then by the exact text.
    """
    folded = unicodedata.normalize("NFKD", name.casefold())
    base = "".join(c for c in folded if not unicodedata.combining(c))
    return base, folded, name
