"""FastAPI app exposing lazy top-k sorting and the lazy-vs-full sort benchmark."""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import ValidationError

from models import (
    BenchmarkParams, BenchmarkResponse, HealthResponse, PerformanceResponse,
    StatusResponse, TopKRequest, TopKResponse
)
from ordering import ComparatorError
from utils import (
    clear_performance_metrics,
    comparator_for,
    get_performance_summary,
    measure_performance,
    run_benchmark,
    self_test,
    top_k,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Lazy Sort Service",
    description="Sorted top-k selection that only partitions as much input as it needs",
    version="1.0.0"
)


@app.get("/", response_model=StatusResponse)
async def root():
    """Basic service banner."""
    return StatusResponse(
        ok=True,
        message="Lazy Sort Service operational - Features: lazy quicksort top-k, partial orders, benchmark",
        timestamp=datetime.now()
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Run a small self test and report metrics."""
    passed = self_test()
    return HealthResponse(
        healthy=passed,
        self_test_passed=passed,
        performance_metrics={
            k: v for k, v in get_performance_summary().items() if k != "operations"
        },
        timestamp=datetime.now()
    )


@app.post("/sort/top-k", response_model=TopKResponse)
async def sort_top_k(request: TopKRequest):
    """Return the first k items of the request in sorted order."""
    logger.info(
        f"Top-{request.k} request over {len(request.items)} items "
        f"(order={request.order.value}, incomparable_first={request.incomparable_first})"
    )
    comparator = comparator_for(request.order, request.incomparable_first)

    try:
        (items, iterator), perf = measure_performance(
            "top_k", top_k, list(request.items), request.k, comparator
        )
    except (TypeError, ComparatorError) as e:
        # Mixed types such as 1 and "a" have no total order
        logger.warning(f"Top-k request rejected: {e}")
        raise HTTPException(
            status_code=400,
            detail=(
                f"Items cannot be ordered: {e}. With incomparable_first set, values of "
                f"unrelated types are accepted but their relative placement is unspecified."
            )
        )
    except Exception as e:
        logger.error(f"Top-k request failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Sorting failed: {str(e)}")

    perf["result_size"] = len(items)
    return TopKResponse(
        items=items,
        k=request.k,
        input_size=len(request.items),
        partitions=iterator.stats.partitions,
        comparisons=iterator.stats.comparisons,
        execution_time_ms=perf["execution_time_ms"],
        timestamp=datetime.now()
    )


@app.get("/benchmark", response_model=BenchmarkResponse)
async def benchmark(
    vec_size: int = Query(50000, description="Number of random integers"),
    pick_size: int = Query(25, description="Number of leading elements to take"),
    value_range: int = Query(100000, description="Upper bound (exclusive) of random values"),
    repeats: int = Query(3, description="Timing repetitions"),
    seed: Optional[int] = Query(None, description="Random seed")
):
    """Compare sorted(data)[:k] with lazily taking k elements."""
    try:
        params = BenchmarkParams(
            vec_size=vec_size,
            pick_size=pick_size,
            value_range=value_range,
            repeats=repeats,
            seed=seed
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    try:
        result = run_benchmark(params)
    except Exception as e:
        logger.error(f"Benchmark failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Benchmark failed: {str(e)}")

    return BenchmarkResponse(params=params, result=result, timestamp=datetime.now())


@app.get("/metrics", response_model=PerformanceResponse)
async def get_metrics():
    """Performance summary of top-k requests."""
    return PerformanceResponse(**get_performance_summary())


@app.delete("/metrics", response_model=StatusResponse)
async def reset_metrics():
    """Clear recorded performance metrics."""
    clear_performance_metrics()
    return StatusResponse(ok=True, message="Performance metrics cleared", timestamp=datetime.now())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
