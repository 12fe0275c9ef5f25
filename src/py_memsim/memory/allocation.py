"""Contiguous allocation — placing processes into fixed memory partitions.

Before paging, memory was carved into **fixed partitions** (blocks) of
different sizes.  Each incoming process must be placed into a single
block large enough to hold it.  The block is then taken for the rest of
the run; whatever the process doesn't use is wasted.  That waste is
**internal fragmentation**.

Which free block should a process get?  Four classic answers:

- **First Fit** — scan from the start, take the first block that fits.
  Fast and simple.
- **Best Fit** — take the *smallest* block that fits, leaving the big
  blocks for big processes.
- **Worst Fit** — take the *largest* block that fits, on the theory
  that the leftover is more likely to be useful (it isn't here, since
  blocks are never split).
- **Next Fit** — like First Fit, but resume scanning just after the
  last successful placement instead of at block 0, wrapping around.

Design choices:
    - **Strategy pattern**, like the page replacement policies: each
      algorithm is a small ``PlacementPolicy`` class with one
      ``choose()`` method.  The shared loop in ``_allocate`` never
      changes when an algorithm is added.
    - **A fresh policy per call** — Next Fit's resume pointer lives on
      the policy instance, so it survives across processes within one
      run but never across runs.
    - **Linear scans with strict comparisons** — ties in Best/Worst Fit
      always go to the lowest block index.
    - **Results are frozen and derived** — an ``AllocationResult``
      stores only the inputs and the final assignment; every statistic
      is computed from those on demand.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from py_memsim.errors import InvalidInputError, require_sizes


class Strategy(StrEnum):
    """Name each allocation strategy.

    Declaration order is also the comparison order: when two strategies
    score the same, the one declared first wins.
    """

    FIRST_FIT = "First Fit"
    BEST_FIT = "Best Fit"
    WORST_FIT = "Worst Fit"
    NEXT_FIT = "Next Fit"


# ---------------------------------------------------------------------------
# Placement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class PlacementPolicy(Protocol):
    """Interface for block placement algorithms."""

    def choose(self, blocks: Sequence[int], occupied: Sequence[bool], size: int) -> int | None:
        """Pick a free block for a process of *size*.

        Args:
            blocks: Block sizes, indexed by block number.
            occupied: ``occupied[i]`` is True once block *i* hosts a process.
            size: The size of the process being placed.

        Returns:
            The chosen block index, or None if no free block fits.

        """
        ...  # pragma: no cover


class FirstFitPolicy:
    """First Fit — the lowest-numbered free block that is big enough."""

    def choose(self, blocks: Sequence[int], occupied: Sequence[bool], size: int) -> int | None:
        """Scan from block 0 and stop at the first fit."""
        for index, block in enumerate(blocks):
            if not occupied[index] and block >= size:
                return index
        return None


class BestFitPolicy:
    """Best Fit — the smallest free block that is big enough."""

    def choose(self, blocks: Sequence[int], occupied: Sequence[bool], size: int) -> int | None:
        """Scan every block, keeping the tightest fit seen so far."""
        best: int | None = None
        for index, block in enumerate(blocks):
            if occupied[index] or block < size:
                continue
            if best is None or block < blocks[best]:
                best = index
        return best


class WorstFitPolicy:
    """Worst Fit — the largest free block that is big enough."""

    def choose(self, blocks: Sequence[int], occupied: Sequence[bool], size: int) -> int | None:
        """Scan every block, keeping the roomiest fit seen so far."""
        worst: int | None = None
        for index, block in enumerate(blocks):
            if occupied[index] or block < size:
                continue
            if worst is None or block > blocks[worst]:
                worst = index
        return worst


class NextFitPolicy:
    """Next Fit — First Fit that remembers where it left off.

    The scan for each process starts at the block right after the one
    used by the previous *successful* placement and wraps around past
    the end.  A failed placement leaves the pointer where it was.
    """

    def __init__(self) -> None:
        """Create a policy whose first scan starts at block 0."""
        self._next = 0

    @property
    def resume_index(self) -> int:
        """Return the block index the next scan will start from."""
        return self._next

    def choose(self, blocks: Sequence[int], occupied: Sequence[bool], size: int) -> int | None:
        """Scan each block once, starting at the resume pointer."""
        count = len(blocks)
        for offset in range(count):
            index = (self._next + offset) % count
            if not occupied[index] and blocks[index] >= size:
                self._next = (index + 1) % count
                return index
        return None


_POLICIES: dict[Strategy, Callable[[], PlacementPolicy]] = {
    Strategy.FIRST_FIT: FirstFitPolicy,
    Strategy.BEST_FIT: BestFitPolicy,
    Strategy.WORST_FIT: WorstFitPolicy,
    Strategy.NEXT_FIT: NextFitPolicy,
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AllocationResult:
    """The outcome of running one strategy over one workload.

    Attributes:
        strategy: Which algorithm produced this result.
        blocks: The block sizes the run started with.
        processes: The process sizes, in arrival order.
        allocation: For each process, the block index it was placed in,
            or None if it could not be placed.

    """

    strategy: Strategy
    blocks: tuple[int, ...]
    processes: tuple[int, ...]
    allocation: tuple[int | None, ...]

    @property
    def allocated_count(self) -> int:
        """Return how many processes were placed."""
        return sum(1 for index in self.allocation if index is not None)

    @property
    def unallocated_count(self) -> int:
        """Return how many processes found no block."""
        return len(self.allocation) - self.allocated_count

    @property
    def unallocated_memory(self) -> int:
        """Return the total size of the processes that found no block."""
        return sum(
            size for size, index in zip(self.processes, self.allocation, strict=True) if index is None
        )

    @property
    def memory_used(self) -> int:
        """Return the total size of the placed processes (not their blocks)."""
        return sum(
            size
            for size, index in zip(self.processes, self.allocation, strict=True)
            if index is not None
        )

    @property
    def total_memory(self) -> int:
        """Return the combined size of all blocks."""
        return sum(self.blocks)

    @property
    def utilization(self) -> float:
        """Return the percentage of total block memory holding process data."""
        return self.memory_used / self.total_memory * 100

    @property
    def internal_fragmentation(self) -> int:
        """Return the memory wasted inside occupied blocks."""
        return sum(
            self.blocks[index] - size
            for size, index in zip(self.processes, self.allocation, strict=True)
            if index is not None
        )

    @property
    def unused_memory(self) -> int:
        """Return the combined size of blocks that host nothing."""
        occupied = {index for index in self.allocation if index is not None}
        return sum(block for index, block in enumerate(self.blocks) if index not in occupied)

    @property
    def score(self) -> float:
        """Return the ranking score: placed processes plus utilization as a fraction."""
        return self.allocated_count + self.utilization / 100

    def block_usage(self) -> list[int | None]:
        """Return, for each block, the index of the process it hosts (or None)."""
        usage: list[int | None] = [None] * len(self.blocks)
        for process, index in enumerate(self.allocation):
            if index is not None:
                usage[index] = process
        return usage

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready view including the derived statistics."""
        return {
            "strategy": str(self.strategy),
            "blocks": list(self.blocks),
            "processes": list(self.processes),
            "allocation": list(self.allocation),
            "allocated_count": self.allocated_count,
            "unallocated_count": self.unallocated_count,
            "unallocated_memory": self.unallocated_memory,
            "memory_used": self.memory_used,
            "total_memory": self.total_memory,
            "utilization": self.utilization,
            "internal_fragmentation": self.internal_fragmentation,
            "unused_memory": self.unused_memory,
        }


# ---------------------------------------------------------------------------
# Strategy entry points
# ---------------------------------------------------------------------------


def _allocate(strategy: Strategy, blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """Place every process in order using a fresh policy for *strategy*."""
    block_sizes = require_sizes(blocks, field="blocks")
    process_sizes = require_sizes(processes, field="processes")

    policy = _POLICIES[strategy]()
    occupied = [False] * len(block_sizes)
    allocation: list[int | None] = []
    for size in process_sizes:
        index = policy.choose(block_sizes, occupied, size)
        if index is not None:
            occupied[index] = True
        allocation.append(index)

    return AllocationResult(
        strategy=strategy,
        blocks=block_sizes,
        processes=process_sizes,
        allocation=tuple(allocation),
    )


def first_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """Allocate with First Fit.

    Raises:
        InvalidInputError: If either sequence is empty or holds a
            non-positive size.

    """
    return _allocate(Strategy.FIRST_FIT, blocks, processes)


def best_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """Allocate with Best Fit (ties go to the lowest block index)."""
    return _allocate(Strategy.BEST_FIT, blocks, processes)


def worst_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """Allocate with Worst Fit (ties go to the lowest block index)."""
    return _allocate(Strategy.WORST_FIT, blocks, processes)


def next_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """Allocate with Next Fit (resume pointer is local to this call)."""
    return _allocate(Strategy.NEXT_FIT, blocks, processes)


ALLOCATORS: dict[Strategy, Callable[[Sequence[int], Sequence[int]], AllocationResult]] = {
    Strategy.FIRST_FIT: first_fit,
    Strategy.BEST_FIT: best_fit,
    Strategy.WORST_FIT: worst_fit,
    Strategy.NEXT_FIT: next_fit,
}


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def compare_results(results: Mapping[Strategy, AllocationResult | None]) -> Strategy | None:
    """Return the best strategy among those that were actually run.

    Strategies are visited in ``Strategy`` declaration order and a later
    one only wins with a strictly higher ``score``, so ties go to the
    earlier strategy.  Missing keys and None values are skipped.

    Args:
        results: Map of strategy to its result, or None if not run.

    Returns:
        The winning strategy, or None if no strategy was run.

    """
    best: Strategy | None = None
    best_score = 0.0
    for strategy in Strategy:
        result = results.get(strategy)
        if result is None:
            continue
        score = result.score
        if best is None or score > best_score:
            best = strategy
            best_score = score
    return best


@dataclass(frozen=True)
class ComparisonReport:
    """Side-by-side results for a set of strategies on one workload.

    Attributes:
        blocks: The block sizes every strategy started with.
        processes: The process sizes, in arrival order.
        results: Every strategy mapped to its result, or None if skipped.
        best: The winning strategy, or None if none were run.

    """

    blocks: tuple[int, ...]
    processes: tuple[int, ...]
    results: Mapping[Strategy, AllocationResult | None]
    best: Strategy | None

    def ran(self) -> list[Strategy]:
        """Return the strategies that were run, in comparison order."""
        return [strategy for strategy in Strategy if self.results.get(strategy) is not None]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready view of every result and the winner."""
        results: dict[str, Any] = {}
        for strategy in Strategy:
            result = self.results.get(strategy)
            results[str(strategy)] = result.to_dict() if result is not None else None
        return {
            "blocks": list(self.blocks),
            "processes": list(self.processes),
            "results": results,
            "best": str(self.best) if self.best is not None else None,
        }


def _resolve_strategies(strategies: Iterable[Strategy | str]) -> set[Strategy]:
    selected: set[Strategy] = set()
    for name in strategies:
        try:
            selected.add(Strategy(name))
        except ValueError:
            msg = f"Unknown strategy: {name!r}"
            raise InvalidInputError(msg) from None
    return selected


def run_comparison(
    blocks: Sequence[int],
    processes: Sequence[int],
    strategies: Iterable[Strategy | str] | None = None,
) -> ComparisonReport:
    """Run the selected strategies on one workload and pick the best.

    Args:
        blocks: Block sizes.
        processes: Process sizes, in arrival order.
        strategies: Strategies (or their display names) to run.
            Defaults to all four.

    Returns:
        A report holding a result (or None) for every strategy.

    Raises:
        InvalidInputError: On malformed sizes or an unknown strategy name.

    """
    block_sizes = require_sizes(blocks, field="blocks")
    process_sizes = require_sizes(processes, field="processes")
    selected = set(Strategy) if strategies is None else _resolve_strategies(strategies)

    results: dict[Strategy, AllocationResult | None] = {}
    for strategy in Strategy:
        if strategy in selected:
            results[strategy] = ALLOCATORS[strategy](block_sizes, process_sizes)
        else:
            results[strategy] = None

    return ComparisonReport(
        blocks=block_sizes,
        processes=process_sizes,
        results=results,
        best=compare_results(results),
    )
