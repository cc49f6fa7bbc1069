# palette_quant/kdtree.py
from __future__ import annotations

"""
k-d tree over palette colours.

Built once from a palette, read-only afterwards. Levels split on R, G, B, A in
turn (axis = depth mod 4) at the median colour for that channel, so the tree
stays balanced. Queries are exact: the result is always a palette member with
the smallest RGBA distance to the query.

Exports:
  KdLeaf, KdSplit : tree node variants
  PaletteIndex    : the index, PaletteIndex.build(palette) -> PaletteIndex
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .constants import MAX_DISTANCE
from .core_types import Palette, RGBATuple, coerce_to_rgba_tuple
from .distance import axis_channel, colour_distance
from .errors import EmptyPaletteError


@dataclass(frozen=True)
class KdLeaf:
    """Node without children."""

    colour: RGBATuple


@dataclass(frozen=True)
class KdSplit:
    """Node splitting its subtree on one channel at its own colour's value."""

    colour: RGBATuple
    axis: int
    left: Optional["KdNode"]  # channel value <= colour[axis]
    right: Optional["KdNode"]  # channel value >= colour[axis]


KdNode = Union[KdLeaf, KdSplit]


def _build_node(colours: List[RGBATuple], depth: int) -> KdNode:
    """Subtree over a non-empty list of colours."""
    if len(colours) == 1:
        return KdLeaf(colours[0])
    axis = axis_channel(depth)
    # Stable sort: colours equal on this channel keep palette order.
    ordered = sorted(colours, key=lambda c: c[axis])
    mid = len(ordered) // 2
    lower, upper = ordered[:mid], ordered[mid + 1 :]
    return KdSplit(
        colour=ordered[mid],
        axis=axis,
        left=_build_node(lower, depth + 1) if lower else None,
        right=_build_node(upper, depth + 1) if upper else None,
    )


def _node_height(node: Optional[KdNode]) -> int:
    if node is None:
        return 0
    if isinstance(node, KdLeaf):
        return 1
    return 1 + max(_node_height(node.left), _node_height(node.right))


def _search(
    node: Optional[KdNode],
    query: RGBATuple,
    best: RGBATuple,
    best_dist: int,
) -> Tuple[RGBATuple, int]:
    """Return the closest (colour, distance) seen so far, descending from node."""
    if node is None:
        return best, best_dist

    dist = colour_distance(query, node.colour)
    if dist < best_dist:
        best, best_dist = node.colour, dist
    if isinstance(node, KdLeaf) or best_dist == 0:
        return best, best_dist

    delta = query[node.axis] - node.colour[node.axis]
    if delta < 0:
        near, far = node.left, node.right
    else:
        near, far = node.right, node.left

    best, best_dist = _search(near, query, best, best_dist)
    # Points across the plane are at least delta² away.
    if delta * delta < best_dist:
        best, best_dist = _search(far, query, best, best_dist)
    return best, best_dist


@dataclass(frozen=True)
class PaletteIndex:
    """Immutable nearest-colour index over a palette."""

    root: KdNode
    palette: Palette
    depth: int

    @classmethod
    def build(cls, palette: Sequence[RGBATuple]) -> "PaletteIndex":
        """
        Build the tree from palette colours.

        Raises:
          EmptyPaletteError: when palette has no colours.
        """
        colours: Palette = tuple(coerce_to_rgba_tuple(c) for c in palette)
        if not colours:
            raise EmptyPaletteError("cannot build a palette index from zero colours")
        root = _build_node(list(colours), 0)
        return cls(root=root, palette=colours, depth=_node_height(root))

    def __len__(self) -> int:
        return len(self.palette)

    def nearest_with_distance(self, query: RGBATuple) -> Tuple[RGBATuple, int]:
        """
        Nearest palette colour and its squared distance to query.

        query may be any 3- or 4-channel sequence, numpy uint8 rows included.
        """
        query = coerce_to_rgba_tuple(query)
        return _search(self.root, query, self.root.colour, MAX_DISTANCE + 1)

    def nearest(self, query: RGBATuple) -> RGBATuple:
        """Nearest palette colour to query. Deterministic for a fixed palette."""
        return self.nearest_with_distance(query)[0]


__all__ = ["KdLeaf", "KdSplit", "KdNode", "PaletteIndex"]
