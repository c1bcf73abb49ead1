import math
import pytest
from itertools import islice

from lazysort import lazy_sorted


class TestPartialWork:
    """Work done is proportional to what is consumed, counted not timed"""

    def _numbers(self, rng, n=10000):
        return [rng.randrange(100000) for _ in range(n)]

    def test_top_k_needs_fewer_partitions_than_full_sort(self, rng):
        numbers = self._numbers(rng)

        partial = lazy_sorted(numbers)
        head = list(islice(partial, 10))

        full = lazy_sorted(numbers)
        everything = list(full)

        assert head == everything[:10]
        assert partial.stats.partitions * 10 < full.stats.partitions, (
            f"Partial: {partial.stats.partitions}, full: {full.stats.partitions}"
        )
        assert partial.stats.comparisons * 3 < full.stats.comparisons, (
            f"Partial: {partial.stats.comparisons}, full: {full.stats.comparisons}"
        )

    def test_work_grows_with_k(self, rng):
        numbers = self._numbers(rng, 5000)
        partitions = []
        for k in (1, 100, 1000, 5000):
            it = lazy_sorted(numbers)
            list(islice(it, k))
            partitions.append(it.stats.partitions)
        assert partitions == sorted(partitions), f"Work should not shrink as k grows: {partitions}"
        assert partitions[0] < partitions[-1]

    def test_first_element_costs_linear_comparisons(self, rng):
        n = 10000
        it = lazy_sorted(self._numbers(rng, n))
        next(it)
        assert it.stats.comparisons < 6 * n, f"Too many comparisons: {it.stats.comparisons}"

    def test_untouched_ranges_stay_unresolved(self, rng):
        it = lazy_sorted(self._numbers(rng, 2000))
        next(it)
        widest = max(hi - lo for lo, hi in it._work)
        assert widest > 100, "Upper regions should still be pending after one element"

    def test_no_work_before_first_demand(self):
        it = lazy_sorted(range(1000))
        assert it.stats.partitions == 0
        assert it.stats.comparisons == 0

    @pytest.mark.parametrize("k", [0, 1, 5])
    def test_consuming_k_emits_k(self, k):
        it = lazy_sorted(range(50, 0, -1))
        assert list(islice(it, k)) == list(range(1, k + 1))
        assert it.stats.emitted == k


class TestDuplicateHeavyInputs:
    """Runs of equal values must not degrade partitioning to quadratic work"""

    def _drained_comparisons(self, data):
        it = lazy_sorted(data)
        result = list(it)
        assert result == sorted(data)
        return it.stats.comparisons

    @pytest.mark.parametrize("make", [
        lambda n: [7] * n,
        lambda n: [0, 1] * (n // 2),
        lambda n: [True, False, False] * (n // 3),
    ])
    def test_full_drain_stays_n_log_n(self, make):
        n = 4000
        comparisons = self._drained_comparisons(make(n))
        bound = 3 * n * math.log2(n)
        assert comparisons < bound, f"{comparisons} comparisons, expected under {bound:.0f}"

    def test_work_grows_near_linearly_with_input(self):
        small = self._drained_comparisons([0, 1] * 1000)
        large = self._drained_comparisons([0, 1] * 4000)
        # four times the input: n log n gives under 5x, quadratic would give 16x
        assert large < 7 * small, f"small={small}, large={large}"

    def test_top_k_of_identical_values_is_cheap(self):
        it = lazy_sorted([7] * 4000)
        assert list(islice(it, 100)) == [7] * 100
        assert it.stats.comparisons < 20000, f"Too many comparisons: {it.stats.comparisons}"

    def test_equal_runs_split_across_both_sides(self):
        it = lazy_sorted([5] * 1001)
        next(it)
        widest = max(hi - lo for lo, hi in it._work)
        assert widest < 800, "Equal values should be shared between both partitions"
