import pytest
from pydantic import ValidationError

from models import BenchmarkParams, SortOrder, TopKRequest
from ordering import FunctionOrder, NaturalOrder, PartialOrder
from utils import (
    comparator_for,
    count_partitions,
    generate_numbers,
    get_performance_summary,
    measure_performance,
    run_benchmark,
    self_test,
    top_k,
)


class TestBenchmark:
    """Lazy top-k against a full sort"""

    def test_run_benchmark(self):
        params = BenchmarkParams(vec_size=3000, pick_size=25, seed=5, repeats=1)
        result = run_benchmark(params)
        assert result.results_match is True
        assert result.vec_size == 3000
        assert result.full_sort_ms >= 0
        assert result.lazy_sort_ms > 0
        assert result.partitions < 3000

    def test_generate_numbers_is_seeded(self):
        params = BenchmarkParams(vec_size=100, pick_size=5, value_range=50, seed=11)
        numbers = generate_numbers(params)
        assert numbers == generate_numbers(params)
        assert len(numbers) == 100
        assert all(0 <= n < 50 for n in numbers)

    def test_count_partitions(self, rng):
        numbers = [rng.randrange(10000) for _ in range(2000)]
        assert count_partitions(numbers, 5) < count_partitions(numbers)
        assert count_partitions([], 5) == 0

    def test_params_validation(self):
        with pytest.raises(ValidationError):
            BenchmarkParams(vec_size=10, pick_size=11)
        with pytest.raises(ValidationError):
            BenchmarkParams(repeats=0)

    def test_self_test(self):
        assert self_test() is True


class TestTopKHelpers:
    """Comparator selection and top-k extraction"""

    def test_comparator_for(self):
        assert isinstance(comparator_for(SortOrder.ASCENDING), NaturalOrder)
        assert comparator_for(SortOrder.DESCENDING).reverse is True
        assert isinstance(comparator_for(SortOrder.LENGTH), FunctionOrder)
        partial = comparator_for(SortOrder.DESCENDING, incomparable_first=True)
        assert isinstance(partial, PartialOrder)
        assert partial.incomparable_first is True

    def test_top_k_returns_iterator_stats(self):
        items, iterator = top_k([5, 4, 3, 2, 1], 2, NaturalOrder())
        assert items == [1, 2]
        assert iterator.stats.emitted == 2

    def test_top_k_request_defaults(self):
        request = TopKRequest(items=[1, 2])
        assert request.k == 10
        assert request.order == SortOrder.ASCENDING
        assert request.incomparable_first is None


class TestPerformanceTracking:
    """measure_performance bookkeeping"""

    def test_success_is_recorded(self):
        result, perf = measure_performance("double", lambda x: [x, x], 3)
        assert result == [3, 3]
        assert perf["success"] is True
        assert perf["result_size"] == 2
        assert get_performance_summary()["total_operations"] == 1

    def test_failure_is_recorded_and_raised(self):
        def boom():
            raise RuntimeError("failed")

        with pytest.raises(RuntimeError):
            measure_performance("boom", boom)
        summary = get_performance_summary()
        assert summary["total_operations"] == 1
        assert summary["operations"][0]["success"] is False
