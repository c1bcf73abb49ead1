"""
Lazy min-heap built from a forest of small heap-ordered trees.

Insertion is O(1): a new element either hangs under the most recent tree's
root or starts a tree of its own. The real ordering work is deferred to
``pop_min``, which scans the tree roots, merges trees it passes along the
way, and promotes the children of the removed root to top-level trees.
"""

import logging
from typing import Any, Iterator, List, Optional

from ordering import Comparator, Ordering, as_comparator

logger = logging.getLogger(__name__)

MAX_SUBTREES = 8


class _Tree:
    __slots__ = ("node", "subtrees")

    def __init__(self, node):
        self.node = node
        self.subtrees: Optional[List["_Tree"]] = None

    def size(self) -> int:
        if self.subtrees is None:
            return 1
        return 1 + sum(tree.size() for tree in self.subtrees)

    def add(self, tree: "_Tree"):
        if self.subtrees is None:
            self.subtrees = [tree]
        else:
            self.subtrees.append(tree)

    def accepts(self, tree: "_Tree", comparator: Comparator) -> bool:
        """True if ``tree`` may hang under this root without breaking heap order"""
        if comparator.compare(self.node, tree.node) not in (Ordering.LESS, Ordering.EQUAL):
            return False
        return self.subtrees is None or len(self.subtrees) < MAX_SUBTREES

    def __repr__(self):
        return f"_Tree(node={self.node!r}, subtrees={self.subtrees!r})"


def _swap_remove(items: list, index: int):
    """Remove items[index] in O(1) by moving the last element into its slot"""
    item = items[index]
    last = items.pop()
    if index < len(items):
        items[index] = last
    return item


class LazyHeap:
    """Min-heap ordered by ``compare`` (natural order when omitted)"""

    def __init__(self, compare=None):
        self._trees: List[_Tree] = []
        self._comparator = as_comparator(compare)

    def add(self, item: Any) -> None:
        tree = _Tree(item)
        if self._trees and self._trees[-1].accepts(tree, self._comparator):
            self._trees[-1].add(tree)
        else:
            self._trees.append(tree)

    def extend(self, items) -> None:
        for item in items:
            self.add(item)

    def pop_min(self) -> Optional[Any]:
        """Remove and return the smallest element, or None if the heap is empty"""
        trees = self._trees
        if not trees:
            return None

        smallest = 0
        idx = 1
        while idx < len(trees):
            if self._comparator.compare(trees[smallest].node, trees[idx].node) is Ordering.GREATER:
                smallest = idx
                idx += 1
            elif trees[smallest].accepts(trees[idx], self._comparator):
                # idx now holds what was the last tree, so don't advance
                trees[smallest].add(_swap_remove(trees, idx))
            else:
                idx += 1

        winner = _swap_remove(trees, smallest)
        if winner.subtrees:
            logger.debug(f"Promoting {len(winner.subtrees)} subtrees")
            trees.extend(winner.subtrees)
        logger.debug(f"Heap has {len(trees)} trees after removing tree {smallest}")
        return winner.node

    def drain(self) -> Iterator[Any]:
        """Yield elements smallest first until the heap is empty"""
        while self._trees:
            yield self.pop_min()

    def size(self) -> int:
        return sum(tree.size() for tree in self._trees)

    def __len__(self):
        return self.size()

    def __bool__(self):
        return bool(self._trees)

    def __repr__(self):
        return f"LazyHeap(trees={self._trees!r})"
