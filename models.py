"""
Pydantic Models

Configuration and request/response models for the lazy sort service and
benchmark harness.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from enum import Enum


MAX_ITEMS = 1_000_000


class SortOrder(str, Enum):
    """Orderings available over the HTTP API"""
    ASCENDING = "ascending"
    DESCENDING = "descending"
    LENGTH = "length"  # shorter first, ties in natural order


class TopKRequest(BaseModel):
    """Request for the first k elements of a list in sorted order"""
    items: List[Any] = Field(
        ...,
        description="Elements to sort",
        max_length=MAX_ITEMS,
        examples=[[9, 1, 3, 4, 4, 2, 4]]
    )
    k: int = Field(
        10,
        description="Number of leading elements to return",
        ge=0
    )
    order: SortOrder = Field(
        SortOrder.ASCENDING,
        description="Ordering to apply"
    )
    incomparable_first: Optional[bool] = Field(
        None,
        description="Use partial ordering; place incomparable elements (e.g. null) first or last"
    )

    @field_validator('items')
    @classmethod
    def validate_items(cls, v):
        """Reject nested containers, which have no useful order"""
        for item in v:
            if isinstance(item, (list, dict)):
                raise ValueError("Items must be scalar values (numbers, strings, booleans or null)")
        return v

    @model_validator(mode='after')
    def validate_order(self):
        """Length ordering only makes sense for strings"""
        if self.order == SortOrder.LENGTH:
            if any(not isinstance(item, str) for item in self.items):
                raise ValueError("Length ordering requires every item to be a string")
        return self


class TopKResponse(BaseModel):
    """Result of a top-k request"""
    ok: bool = Field(True)
    items: List[Any] = Field(..., description="First k elements in order")
    k: int = Field(..., description="Requested count")
    input_size: int = Field(..., description="Number of input elements")
    partitions: int = Field(..., description="Partition passes performed")
    comparisons: int = Field(..., description="Comparisons performed")
    execution_time_ms: float = Field(..., description="Time spent sorting")
    timestamp: datetime = Field(default_factory=datetime.now)


class BenchmarkParams(BaseModel):
    """Parameters for comparing a full sort against lazy top-k"""
    vec_size: int = Field(
        50000,
        description="Number of random integers to sort",
        ge=1,
        le=1_000_000
    )
    pick_size: int = Field(
        25,
        description="Number of leading elements to take",
        ge=1
    )
    value_range: int = Field(
        100000,
        description="Random values are drawn from [0, value_range)",
        ge=1
    )
    repeats: int = Field(
        3,
        description="Timing repetitions; the best run is reported",
        ge=1,
        le=20
    )
    seed: Optional[int] = Field(
        None,
        description="Random seed for reproducible input"
    )

    @model_validator(mode='after')
    def validate_pick_size(self):
        """pick_size cannot exceed vec_size"""
        if self.pick_size > self.vec_size:
            raise ValueError(f"pick_size ({self.pick_size}) must not exceed vec_size ({self.vec_size})")
        return self


class BenchmarkResult(BaseModel):
    """Timings of one benchmark run"""
    vec_size: int
    pick_size: int
    full_sort_ms: float = Field(..., description="Best time for sorted(data)[:pick_size]")
    lazy_sort_ms: float = Field(..., description="Best time for lazy sort taking pick_size elements")
    speedup: float = Field(..., description="full_sort_ms / lazy_sort_ms")
    partitions: int = Field(..., description="Partitions used by the lazy sort")
    comparisons: int = Field(..., description="Comparisons used by the lazy sort")
    results_match: bool = Field(..., description="Both strategies returned the same elements")


class BenchmarkResponse(BaseModel):
    """Benchmark endpoint response"""
    ok: bool = Field(True)
    params: BenchmarkParams
    result: BenchmarkResult
    timestamp: datetime = Field(default_factory=datetime.now)


class StatusResponse(BaseModel):
    """Basic status response"""
    ok: bool = Field(..., description="Service status")
    message: str = Field(..., description="Status message")
    timestamp: datetime = Field(default_factory=datetime.now)


class HealthResponse(BaseModel):
    """Health check response"""
    healthy: bool
    self_test_passed: bool = Field(..., description="Lazy sort produced the expected order on a fixed input")
    performance_metrics: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


class PerformanceResponse(BaseModel):
    """Performance metrics summary"""
    total_operations: int
    total_time_ms: float
    total_memory_mb: float
    avg_time_ms: float
    avg_memory_mb: float
    operations: List[Dict[str, Any]] = Field(default_factory=list)
