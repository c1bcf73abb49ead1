from itertools import islice
from time import perf_counter
import random

from collection import LazyCollection
from heap import LazyHeap
from lazysort import lazy_sorted, lazy_sorted_by, lazy_sorted_partial
from utils import compare_length_then_natural

print("\n--- Demo: laziness (nothing is read until the first element) ---")

def noisy_source(n):
    for i in range(n):
        if i == 0:
            print("  source started producing ...")
        yield (i * 7919) % n

it = lazy_sorted(noisy_source(10))
print(f"Constructed iterator: {it!r}")
print(f"First element: {next(it)}")
print(f"Stats after one element: {it.stats.to_dict()}\n")

print("--- Demo: partial consumption does partial work ---")
rng = random.Random(7)
numbers = [rng.randrange(100_000) for _ in range(50_000)]

for k in (1, 25, 1000, len(numbers)):
    it = lazy_sorted(numbers)
    t0 = perf_counter()
    head = list(islice(it, k))
    t1 = perf_counter()
    print(f"  k={k:>6}: {it.stats.partitions:>6} partitions, "
          f"{it.stats.comparisons:>8} comparisons, {(t1 - t0) * 1000:.1f}ms")

t0 = perf_counter()
sorted(numbers)[:25]
t1 = perf_counter()
print(f"  builtin sorted()[:25]: {(t1 - t0) * 1000:.1f}ms\n")

print("--- Demo: custom and partial orders ---")
words = ["a", "cat", "sat", "on", "the", "mat"]
print("  by length then text:", list(lazy_sorted_by(words, compare_length_then_natural)))
values = [3.0, float("nan"), 1.0, None, 2.0]
print("  incomparable first:", list(lazy_sorted_partial(values, incomparable_first=True)))
print("  incomparable last: ", list(lazy_sorted_partial(values, incomparable_first=False)))
print()

print("--- Demo: chained collection ---")
top = (
    LazyCollection(range(1, 10_000))
    .map(lambda x: (x * 37) % 1009)
    .filter(lambda v: v % 2 == 0)
    .top_k(5, reverse=True)
    .to_list()
)
print(f"  five largest even residues: {top}\n")

print("--- Demo: lazy heap ---")
heap = LazyHeap()
heap.extend([10, 11, 12, 1, 2, 3, 20])
print(f"  size={heap.size()}, drained={list(heap.drain())}")
