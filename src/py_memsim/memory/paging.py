"""Page replacement — replaying a reference string against a few frames.

A process touches pages in some order, the **reference string**.  Only
``frame_count`` of them fit in physical memory at once.  On every
reference one of two things happens:

- **Hit** — the page is already resident; nothing moves.
- **Fault** — the page must be loaded.  If a frame is free it goes
  there; otherwise the **replacement policy** picks a resident page to
  evict first.

**FIFO** evicts whichever resident page arrived earliest, no matter how
recently it was used.  It is the easiest policy to implement (a queue)
and the easiest to reason about, but it famously suffers from
**Belady's anomaly**: for some reference strings, giving it *more*
frames produces *more* faults.

Design choices:
    - **Policy behind a protocol** — the replay loop only talks to a
      ``ReplacementPolicy``; FIFO is the one shipped.
    - **Frames kept in arrival order** — for FIFO that is also the
      eviction order, so the snapshot reads left-to-right as
      oldest-to-newest.
    - **Snapshots are tuples** — each step captures an immutable copy of
      the frames, so later steps can't rewrite earlier history.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from py_memsim.errors import require_frame_count, require_pages

# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms.

    Each policy tracks which pages are resident and decides which one
    to evict when every frame is in use.
    """

    def add_page(self, page: int) -> None:
        """Record that a page was loaded into a frame."""
        ...  # pragma: no cover

    def remove_page(self, page: int) -> None:
        """Record that a page was evicted."""
        ...  # pragma: no cover

    def record_access(self, page: int) -> None:
        """Record a hit on a resident page."""
        ...  # pragma: no cover

    def select_victim(self) -> int:
        """Choose which resident page to evict.

        Raises:
            IndexError: If no pages are resident.

        """
        ...  # pragma: no cover


class FIFOPolicy:
    """First In, First Out — evict the earliest-loaded page.

    A plain list used as a queue: the front is always the oldest page.
    """

    def __init__(self) -> None:
        """Create an empty FIFO policy."""
        self._queue: list[int] = []

    @property
    def resident(self) -> tuple[int, ...]:
        """Return the resident pages, oldest first."""
        return tuple(self._queue)

    def add_page(self, page: int) -> None:
        """Append a newly loaded page to the back of the queue."""
        self._queue.append(page)

    def remove_page(self, page: int) -> None:
        """Remove a page from the queue."""
        self._queue.remove(page)

    def record_access(self, page: int) -> None:
        """FIFO ignores hits — order is purely by load time."""

    def select_victim(self) -> int:
        """Return the oldest page (front of the queue).

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue[0]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageReplacementStep:
    """One reference in the replay.

    Attributes:
        step: 1-based position in the reference string.
        page: The page that was referenced.
        frames: Resident pages after this reference, oldest first.
        fault: True if the page had to be loaded.
        evicted: The page removed to make room, if any.

    """

    step: int
    page: int
    frames: tuple[int, ...]
    fault: bool
    evicted: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready view of this step."""
        return {
            "step": self.step,
            "page": self.page,
            "frames": list(self.frames),
            "fault": self.fault,
            "evicted": self.evicted,
        }


@dataclass(frozen=True)
class PageReplacementResult:
    """The full trace and totals of one replay.

    Attributes:
        frame_count: Number of physical frames available.
        page_faults: References that required a load.
        page_hits: References served from a resident page.
        steps: One entry per reference, in order.

    """

    frame_count: int
    page_faults: int
    page_hits: int
    steps: tuple[PageReplacementStep, ...]

    @property
    def hit_rate(self) -> float:
        """Return hits as a percentage of all references."""
        return self.page_hits / len(self.steps) * 100

    @property
    def fault_rate(self) -> float:
        """Return faults as a percentage of all references."""
        return self.page_faults / len(self.steps) * 100

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready view including the rates."""
        return {
            "frame_count": self.frame_count,
            "page_faults": self.page_faults,
            "page_hits": self.page_hits,
            "hit_rate": self.hit_rate,
            "fault_rate": self.fault_rate,
            "steps": [step.to_dict() for step in self.steps],
        }


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


def fifo_page_replacement(pages: Sequence[int], frame_count: int) -> PageReplacementResult:
    """Replay *pages* through *frame_count* frames using FIFO replacement.

    Args:
        pages: The reference string.
        frame_count: Number of physical frames (at least 1).

    Returns:
        The per-step trace plus fault/hit totals.

    Raises:
        InvalidInputError: If *pages* is empty or malformed, or
            *frame_count* is less than 1.

    """
    references = require_pages(pages)
    capacity = require_frame_count(frame_count)

    policy = FIFOPolicy()
    frames: list[int] = []
    faults = 0
    hits = 0
    steps: list[PageReplacementStep] = []

    for number, page in enumerate(references, start=1):
        evicted: int | None = None
        if page in frames:
            policy.record_access(page)
            hits += 1
            fault = False
        else:
            if len(frames) >= capacity:
                evicted = policy.select_victim()
                policy.remove_page(evicted)
                frames.remove(evicted)
            frames.append(page)
            policy.add_page(page)
            faults += 1
            fault = True
        steps.append(
            PageReplacementStep(
                step=number,
                page=page,
                frames=tuple(frames),
                fault=fault,
                evicted=evicted,
            )
        )

    return PageReplacementResult(
        frame_count=capacity,
        page_faults=faults,
        page_hits=hits,
        steps=tuple(steps),
    )
