"""
Utility functions for the lazy sort service

Helpers for running top-k requests, measuring performance and
benchmarking lazy partial sorting against a full sort.
"""

import gc
import logging
import random
import time
import tracemalloc
from itertools import islice
from typing import Any, Dict, List, Optional, Tuple

from lazysort import LazySortIterator, lazy_sorted
from models import BenchmarkParams, BenchmarkResult, SortOrder
from ordering import Comparator, FunctionOrder, NaturalOrder, Ordering, PartialOrder

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Global performance tracking
_performance_metrics = {
    "operations": [],
    "total_time_ms": 0.0,
    "total_memory_mb": 0.0,
    "operation_count": 0
}


def measure_performance(operation_name: str, func, *args, **kwargs) -> Tuple[Any, Dict[str, Any]]:
    """Run func and return (result, performance record) with timing and peak memory"""

    # Start memory tracking
    tracemalloc.start()
    gc.collect()

    start_time = time.perf_counter()
    performance_info = {"operation": operation_name, "timestamp": time.time()}

    try:
        result = func(*args, **kwargs)
        performance_info["success"] = True
        performance_info["result_size"] = len(result) if hasattr(result, "__len__") else None
        return result, performance_info

    except Exception as e:
        performance_info["success"] = False
        performance_info["error"] = str(e)
        raise

    finally:
        performance_info["execution_time_ms"] = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        performance_info["memory_usage_mb"] = peak / 1024 / 1024

        _performance_metrics["operations"].append(performance_info)
        _performance_metrics["total_time_ms"] += performance_info["execution_time_ms"]
        _performance_metrics["total_memory_mb"] += performance_info["memory_usage_mb"]
        _performance_metrics["operation_count"] += 1


def get_performance_summary() -> Dict[str, Any]:
    """Get summary of all performance metrics"""
    count = _performance_metrics["operation_count"]
    if count == 0:
        return {
            "total_operations": 0,
            "total_time_ms": 0.0,
            "total_memory_mb": 0.0,
            "avg_time_ms": 0.0,
            "avg_memory_mb": 0.0,
            "operations": []
        }

    return {
        "total_operations": count,
        "total_time_ms": _performance_metrics["total_time_ms"],
        "total_memory_mb": _performance_metrics["total_memory_mb"],
        "avg_time_ms": _performance_metrics["total_time_ms"] / count,
        "avg_memory_mb": _performance_metrics["total_memory_mb"] / count,
        "operations": list(_performance_metrics["operations"][-50:])
    }


def clear_performance_metrics():
    """Clear all performance metrics"""
    global _performance_metrics
    _performance_metrics = {
        "operations": [],
        "total_time_ms": 0.0,
        "total_memory_mb": 0.0,
        "operation_count": 0
    }


# --------- orderings ----------
def compare_length_then_natural(a: str, b: str) -> Ordering:
    """Shorter strings first, equal lengths in natural string order"""
    if len(a) != len(b):
        return Ordering.LESS if len(a) < len(b) else Ordering.GREATER
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def comparator_for(order: SortOrder, incomparable_first: Optional[bool] = None) -> Comparator:
    """Build the comparator for an API sort order"""
    descending = order == SortOrder.DESCENDING
    if incomparable_first is not None:
        if order == SortOrder.LENGTH:
            return PartialOrder(incomparable_first, compare_length_then_natural)
        return PartialOrder(incomparable_first, reverse=descending)

    if order == SortOrder.LENGTH:
        return FunctionOrder(compare_length_then_natural)
    return NaturalOrder(reverse=descending)


# --------- top-k ----------
def top_k(items: List[Any], k: int, comparator: Comparator) -> Tuple[List[Any], LazySortIterator]:
    """Return the first k items in comparator order, plus the iterator for its work counters"""
    iterator = LazySortIterator(items, comparator)
    return list(islice(iterator, k)), iterator


# --------- benchmarking ----------
def generate_numbers(params: BenchmarkParams) -> List[int]:
    """Random integers for a benchmark run"""
    rng = random.Random(params.seed)
    return [rng.randrange(params.value_range) for _ in range(params.vec_size)]


def _best_time_ms(func, repeats: int) -> Tuple[float, Any]:
    best = None
    result = None
    for _ in range(repeats):
        start = time.perf_counter()
        result = func()
        elapsed = (time.perf_counter() - start) * 1000
        if best is None or elapsed < best:
            best = elapsed
    return best, result


def run_benchmark(params: BenchmarkParams) -> BenchmarkResult:
    """Time sorted(data)[:k] against taking k elements from a lazy sort"""
    numbers = generate_numbers(params)
    k = params.pick_size
    logger.info(f"Benchmarking top-{k} of {params.vec_size} numbers ({params.repeats} repeats)")

    full_ms, full_result = _best_time_ms(lambda: sorted(numbers)[:k], params.repeats)

    iterators = []

    def lazy_run():
        iterator = lazy_sorted(numbers)
        iterators.append(iterator)
        return list(islice(iterator, k))

    lazy_ms, lazy_result = _best_time_ms(lazy_run, params.repeats)
    stats = iterators[-1].stats

    speedup = full_ms / lazy_ms if lazy_ms > 0 else 0.0
    logger.info(f"Full sort {full_ms:.2f}ms, lazy sort {lazy_ms:.2f}ms (x{speedup:.2f})")

    return BenchmarkResult(
        vec_size=params.vec_size,
        pick_size=k,
        full_sort_ms=full_ms,
        lazy_sort_ms=lazy_ms,
        speedup=speedup,
        partitions=stats.partitions,
        comparisons=stats.comparisons,
        results_match=(full_result == lazy_result)
    )


def count_partitions(items: List[Any], k: Optional[int] = None) -> int:
    """Partition passes needed to emit the first k elements (all when k is None)"""
    iterator = lazy_sorted(items)
    for _ in islice(iterator, k):
        pass
    return iterator.stats.partitions


def self_test() -> bool:
    """Check the lazy sort against a fixed input"""
    try:
        return list(lazy_sorted([9, 1, 3, 4, 4, 2, 4])) == [1, 2, 3, 4, 4, 4, 9]
    except Exception as e:
        logger.error(f"Lazy sort self test failed: {e}", exc_info=True)
        return False
