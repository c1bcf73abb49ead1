"""
Comparison outcomes and comparator variants for the lazy sort engine.

Every comparator exposes ``compare(a, b) -> Ordering`` and an
``incomparable_first`` routing flag. The engine only ever talks to this
interface, so natural, custom and partial orderings share one partitioning
routine.
"""

from enum import Enum
from numbers import Number
from typing import Any, Callable, Optional


class LazySortError(Exception):
    """Base error for the lazy sort library"""


class ComparatorError(LazySortError, TypeError):
    """Raised when a comparison function returns something that is not an ordering"""


class Ordering(Enum):
    """Outcome of comparing ``a`` with ``b``"""
    LESS = -1
    EQUAL = 0
    GREATER = 1
    INCOMPARABLE = None

    def reverse(self) -> "Ordering":
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self

    @classmethod
    def coerce(cls, value: Any) -> "Ordering":
        """Accept an Ordering, a cmp-style number (int, float, Fraction, Decimal...), or None (incomparable)"""
        if isinstance(value, Ordering):
            return value
        if value is None:
            return cls.INCOMPARABLE
        # bool is an int subclass but never a meaningful comparison result
        if isinstance(value, Number) and not isinstance(value, bool):
            try:
                if value != value:
                    return cls.INCOMPARABLE
                if value < 0:
                    return cls.LESS
                if value > 0:
                    return cls.GREATER
                return cls.EQUAL
            except (TypeError, ArithmeticError):
                # complex numbers, signalling Decimal NaN
                pass
        raise ComparatorError(
            f"Comparator returned {value!r} ({type(value).__name__}); "
            f"expected an Ordering, a negative/zero/positive number or None"
        )


def rich_compare(a: Any, b: Any) -> Ordering:
    """
    Compare two values with Python's rich comparison operators.

    Types with no ordering between them (``None``, or ``str`` against ``int``)
    are incomparable rather than an error.
    """
    try:
        if a < b:
            return Ordering.LESS
        if a > b:
            return Ordering.GREATER
    except TypeError:
        return Ordering.INCOMPARABLE
    if a == b:
        return Ordering.EQUAL
    return Ordering.INCOMPARABLE


class Comparator:
    """Base comparator. Subclasses override ``compare``."""

    incomparable_first = False

    def compare(self, a: Any, b: Any) -> Ordering:
        raise NotImplementedError

    def __call__(self, a: Any, b: Any) -> Ordering:
        return self.compare(a, b)


class NaturalOrder(Comparator):
    """Total order from the elements' own ``<`` and ``>``, optionally through a key"""

    def __init__(self, key: Optional[Callable[[Any], Any]] = None, reverse: bool = False):
        self.key = key
        self.reverse = reverse

    def compare(self, a, b):
        if self.key is not None:
            a, b = self.key(a), self.key(b)
        if a < b:
            result = Ordering.LESS
        elif b < a:
            result = Ordering.GREATER
        else:
            result = Ordering.EQUAL
        return result.reverse() if self.reverse else result

    def __repr__(self):
        return f"NaturalOrder(key={self.key!r}, reverse={self.reverse})"


class FunctionOrder(Comparator):
    """Total order from a caller-supplied cmp-style function"""

    def __init__(self, compare_fn: Callable[[Any, Any], Any]):
        if not callable(compare_fn):
            raise TypeError(f"compare must be callable, got {type(compare_fn).__name__}")
        self.compare_fn = compare_fn

    def compare(self, a, b):
        return Ordering.coerce(self.compare_fn(a, b))

    def __repr__(self):
        return f"FunctionOrder({self.compare_fn!r})"


class PartialOrder(Comparator):
    """
    Partial order with a placement policy for incomparable elements.

    Elements that are incomparable even to themselves (NaN, None) are
    gathered into one block, sorted before everything else when
    ``incomparable_first`` is set and after everything otherwise. Any other
    incomparable pair is reported as INCOMPARABLE and the engine routes it
    to the low or high side of the pivot according to the same flag.
    """

    def __init__(self, incomparable_first: bool,
                 compare_fn: Optional[Callable[[Any, Any], Any]] = None,
                 reverse: bool = False):
        self.incomparable_first = bool(incomparable_first)
        self.compare_fn = compare_fn
        # reverses comparable pairs only; the incomparable block stays put
        self.reverse = reverse

    def _raw(self, a, b) -> Ordering:
        if self.compare_fn is None:
            return rich_compare(a, b)
        return Ordering.coerce(self.compare_fn(a, b))

    def _unordered(self, x) -> bool:
        return self._raw(x, x) is Ordering.INCOMPARABLE

    def compare(self, a, b):
        result = self._raw(a, b)
        if result is not Ordering.INCOMPARABLE:
            return result.reverse() if self.reverse else result

        a_unordered = self._unordered(a)
        b_unordered = self._unordered(b)
        if a_unordered and b_unordered:
            return Ordering.EQUAL
        if a_unordered:
            return Ordering.LESS if self.incomparable_first else Ordering.GREATER
        if b_unordered:
            return Ordering.GREATER if self.incomparable_first else Ordering.LESS
        return Ordering.INCOMPARABLE

    def __repr__(self):
        return (f"PartialOrder(incomparable_first={self.incomparable_first}, "
                f"compare_fn={self.compare_fn!r}, reverse={self.reverse})")


def as_comparator(compare: Any) -> Comparator:
    """Wrap a plain function as a comparator, pass comparators through"""
    if compare is None:
        return NaturalOrder()
    if isinstance(compare, Comparator):
        return compare
    return FunctionOrder(compare)
