"""Memory subsystem — contiguous allocation and page replacement.

Re-exports public symbols so callers can write::

    from py_memsim.memory import first_fit, fifo_page_replacement
"""

from py_memsim.memory.allocation import (
    ALLOCATORS,
    AllocationResult,
    BestFitPolicy,
    ComparisonReport,
    FirstFitPolicy,
    NextFitPolicy,
    PlacementPolicy,
    Strategy,
    WorstFitPolicy,
    best_fit,
    compare_results,
    first_fit,
    next_fit,
    run_comparison,
    worst_fit,
)
from py_memsim.memory.paging import (
    FIFOPolicy,
    PageReplacementResult,
    PageReplacementStep,
    ReplacementPolicy,
    fifo_page_replacement,
)

__all__ = [
    "ALLOCATORS",
    "AllocationResult",
    "BestFitPolicy",
    "ComparisonReport",
    "FIFOPolicy",
    "FirstFitPolicy",
    "NextFitPolicy",
    "PageReplacementResult",
    "PageReplacementStep",
    "PlacementPolicy",
    "ReplacementPolicy",
    "Strategy",
    "WorstFitPolicy",
    "best_fit",
    "compare_results",
    "fifo_page_replacement",
    "first_fit",
    "next_fit",
    "run_comparison",
    "worst_fit",
]
