"""py-memsim — a deterministic memory-management teaching simulator.

Two independent engines:

- **Allocation** — First, Best, Worst, and Next Fit over fixed blocks.
- **Page replacement** — FIFO over a reference string.

Both are pure functions; see ``py_memsim.memory`` for details.
"""

from py_memsim.errors import InvalidInputError
from py_memsim.memory import (
    AllocationResult,
    ComparisonReport,
    PageReplacementResult,
    PageReplacementStep,
    Strategy,
    best_fit,
    compare_results,
    fifo_page_replacement,
    first_fit,
    next_fit,
    run_comparison,
    worst_fit,
)

__all__ = [
    "AllocationResult",
    "ComparisonReport",
    "InvalidInputError",
    "PageReplacementResult",
    "PageReplacementStep",
    "Strategy",
    "best_fit",
    "compare_results",
    "fifo_page_replacement",
    "first_fit",
    "next_fit",
    "run_comparison",
    "worst_fit",
]
