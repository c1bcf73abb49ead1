"""
Lazy sorting iterator.

Wraps any iterable and yields its elements in order, doing only the
quicksort partitioning needed to find the next element. Pulling the first
K elements of an N element source costs roughly O(N + K log N) comparisons
instead of a full O(N log N) sort.

    >>> from itertools import islice
    >>> list(islice(lazy_sorted([9, 1, 3, 4, 4, 2, 4]), 3))
    [1, 2, 3]
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from ordering import (
    Comparator,
    NaturalOrder,
    Ordering,
    PartialOrder,
    as_comparator,
)

logger = logging.getLogger(__name__)

Range = Tuple[int, int]


class EngineState(str, Enum):
    """Lifecycle of a lazy sort iterator"""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


@dataclass
class SortStats:
    """Work counters, so laziness can be checked without timing anything"""
    partitions: int = 0
    comparisons: int = 0
    emitted: int = 0

    def to_dict(self):
        return asdict(self)


def materialize(source: Iterable[Any]) -> List[Any]:
    """Drain ``source`` into a new list. Errors raised by the source propagate."""
    return list(source)


class LazySortIterator:
    """
    Iterator that yields the elements of ``source`` sorted by ``comparator``.

    Nothing is read from the source until the first ``next()``. The buffer
    and a LIFO stack of unresolved ``(lo, hi)`` ranges are kept between
    calls; each call narrows the top range until a single index remains,
    which is then the smallest element not yet emitted.
    """

    def __init__(self, source: Iterable[Any], comparator: Optional[Comparator] = None):
        self._source = source
        self._comparator = comparator if comparator is not None else NaturalOrder()
        self._buffer: Optional[List[Any]] = None
        self._work: Optional[List[Range]] = None
        self._state = EngineState.UNINITIALIZED
        self.stats = SortStats()

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if self._state is EngineState.EXHAUSTED:
            raise StopIteration
        if self._state is EngineState.UNINITIALIZED:
            self._start()

        work = self._work
        while work:
            lo, hi = work.pop()
            if hi - lo == 1:
                item = self._emit(lo)
                if not work:
                    self._finish()
                return item

            try:
                p = self._partition(lo, hi)
            except BaseException:
                # a partially partitioned range is still a permutation of itself
                work.append((lo, hi))
                raise
            if p + 1 < hi:
                work.append((p + 1, hi))
            work.append((p, p + 1))
            if lo < p:
                work.append((lo, p))

        self._finish()
        raise StopIteration

    def __length_hint__(self) -> int:
        if self._state is EngineState.UNINITIALIZED:
            return NotImplemented
        if self._state is EngineState.EXHAUSTED:
            return 0
        return sum(hi - lo for lo, hi in self._work)

    def __repr__(self):
        return f"LazySortIterator(state={self._state.value}, comparator={self._comparator!r})"

    # --------- state transitions ----------
    def _start(self):
        source, self._source = self._source, None
        try:
            self._buffer = materialize(source)
        except Exception:
            # sources are single use, so a failed drain is final
            self._state = EngineState.EXHAUSTED
            raise
        self._work = [(0, len(self._buffer))] if self._buffer else []
        self._state = EngineState.ACTIVE
        logger.debug(f"Materialized {len(self._buffer)} elements for lazy sort")

    def _finish(self):
        self._buffer = None
        self._work = None
        self._state = EngineState.EXHAUSTED
        logger.debug(
            f"Lazy sort exhausted after {self.stats.emitted} elements, "
            f"{self.stats.partitions} partitions, {self.stats.comparisons} comparisons"
        )

    def _emit(self, index: int) -> Any:
        item = self._buffer[index]
        self._buffer[index] = None
        self.stats.emitted += 1
        return item

    # --------- partitioning ----------
    def _compare(self, a, b) -> Ordering:
        self.stats.comparisons += 1
        return self._comparator.compare(a, b)

    def _side(self, item, pivot) -> int:
        """-1 if item belongs strictly below the pivot, 1 if strictly above, 0 if equal"""
        result = self._compare(item, pivot)
        if result is Ordering.INCOMPARABLE:
            return -1 if self._comparator.incomparable_first else 1
        return result.value

    def _less(self, a, b) -> bool:
        return self._compare(a, b) is Ordering.LESS

    def _median_of_three(self, i: int, j: int, k: int) -> int:
        buf = self._buffer
        if self._less(buf[j], buf[i]):
            i, j = j, i
        if self._less(buf[k], buf[j]):
            return i if self._less(buf[k], buf[i]) else k
        return j

    def _partition(self, lo: int, hi: int) -> int:
        """
        Partition ``buffer[lo:hi]`` around a pivot and return the pivot's final index.

        Two scans move inward from both ends. Elements equal to the pivot stop
        both scans and get swapped, so runs of duplicates split evenly instead
        of piling up on one side.
        """
        self.stats.partitions += 1
        buf = self._buffer

        if hi - lo > 2:
            pivot_index = self._median_of_three(lo, lo + (hi - lo) // 2, hi - 1)
            buf[lo], buf[pivot_index] = buf[pivot_index], buf[lo]

        pivot = buf[lo]
        i, j = lo + 1, hi - 1
        # buf[lo+1:i] is never above the pivot, buf[j+1:hi] never below it
        while True:
            while i <= j and self._side(buf[i], pivot) < 0:
                i += 1
            while i <= j and self._side(buf[j], pivot) > 0:
                j -= 1
            if i >= j:
                break
            buf[i], buf[j] = buf[j], buf[i]
            i += 1
            j -= 1
        buf[lo], buf[j] = buf[j], buf[lo]
        return j


# --------- entry points ----------
def lazy_sorted(source: Iterable[Any], key: Optional[Callable[[Any], Any]] = None,
                reverse: bool = False) -> LazySortIterator:
    """Lazily sort by the elements' natural order (or by ``key``)"""
    return LazySortIterator(source, NaturalOrder(key=key, reverse=reverse))


def lazy_sorted_by(source: Iterable[Any], compare: Callable[[Any, Any], Any]) -> LazySortIterator:
    """Lazily sort with a cmp-style function returning an Ordering or a negative/zero/positive number"""
    return LazySortIterator(source, as_comparator(compare))


def lazy_sorted_partial(source: Iterable[Any], incomparable_first: bool,
                        compare: Optional[Callable[[Any, Any], Any]] = None) -> LazySortIterator:
    """Lazily sort a partially ordered source, placing incomparable elements first or last"""
    return LazySortIterator(source, PartialOrder(incomparable_first, compare))
