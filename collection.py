"""
Chainable lazy collection with lazy sorting stages.

Stages are recorded and applied only when the collection is iterated, so
``LazyCollection(data).sorted().take(5)`` partitions just enough of ``data``
to produce five elements.
"""

from itertools import islice

from lazysort import LazySortIterator
from ordering import NaturalOrder, PartialOrder, as_comparator


class LazyCollection:
    """
    A chainable, lazy collection. Transformations are stored and applied
    only when you iterate.
    """
    def __init__(self, source, ops=None):
        self._source = source
        self._ops = ops or []          # sequence of ("op_name", arg)

    # --------- chainable operators (lazy) ----------
    def map(self, fn):
        return self._with_op(("map", fn))

    def filter(self, pred):
        return self._with_op(("filter", pred))

    def skip(self, n):
        return self._with_op(("skip", max(0, int(n))))

    def take(self, n):
        return self._with_op(("take", max(0, int(n))))

    def sorted(self, key=None, reverse=False):
        return self._with_op(("sort", NaturalOrder(key=key, reverse=reverse)))

    def sorted_by(self, compare):
        return self._with_op(("sort", as_comparator(compare)))

    def sorted_partial(self, incomparable_first, compare=None):
        return self._with_op(("sort", PartialOrder(incomparable_first, compare)))

    def top_k(self, k, key=None, reverse=False):
        """The k smallest elements (largest with reverse=True), in order"""
        return self.sorted(key=key, reverse=reverse).take(k)

    # --------- forcing evaluation ----------
    def to_list(self):
        return list(self)

    def first(self, default=None):
        """Return the first element, or default if empty"""
        for item in self:
            return item
        return default

    def count(self):
        """Return the count of elements"""
        count = 0
        for _ in self:
            count += 1
        return count

    # --------- iterator protocol ----------
    def __iter__(self):
        it = iter(self._source)
        for op, arg in self._ops:
            if op == "map":
                it = map(arg, it)
            elif op == "filter":
                it = filter(arg, it)
            elif op == "skip":
                it = islice(it, arg, None)
            elif op == "take":
                it = islice(it, arg)
            elif op == "sort":
                it = LazySortIterator(it, arg)
            else:
                raise ValueError(f"Unknown op: {op}")
        return it

    # --------- helpers ----------
    def _with_op(self, op_tuple):
        return LazyCollection(self._source, self._ops + [op_tuple])

    def __repr__(self):
        stages = ", ".join(op for op, _ in self._ops) or "none"
        return f"LazyCollection(stages=[{stages}])"
