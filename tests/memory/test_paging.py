"""Tests for FIFO page replacement.

A reference string is replayed against a fixed number of frames.  A
resident page is a hit; anything else is a fault that loads the page,
evicting the earliest arrival once every frame is full.

Components tested:
    - **FIFOPolicy**: the queue that picks the eviction victim.
    - **fifo_page_replacement**: the full replay and its trace.
"""

import pytest

from py_memsim.errors import InvalidInputError
from py_memsim.memory.paging import FIFOPolicy, fifo_page_replacement

REFERENCE_STRING = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2]
FRAMES = 3

# Mechanically derived trace for REFERENCE_STRING with 3 frames.
EXPECTED_FRAMES = [
    (7,),
    (7, 0),
    (7, 0, 1),
    (0, 1, 2),
    (0, 1, 2),
    (1, 2, 3),
    (2, 3, 0),
    (3, 0, 4),
    (0, 4, 2),
    (4, 2, 3),
    (2, 3, 0),
    (2, 3, 0),
    (2, 3, 0),
]
EXPECTED_FAULTS = [True, True, True, True, False, True, True, True, True, True, True, False, False]

BELADY_STRING = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]


# -- FIFO Policy --------------------------------------------------------------


class TestFIFOPolicy:
    """Verify the FIFO eviction queue."""

    def test_selects_oldest_page(self) -> None:
        """FIFO should evict the page that was loaded first."""
        policy = FIFOPolicy()
        policy.add_page(1)
        policy.add_page(2)
        policy.add_page(3)
        assert policy.select_victim() == 1

    def test_access_does_not_change_order(self) -> None:
        """Re-accessing a page has no effect on eviction order."""
        policy = FIFOPolicy()
        policy.add_page(1)
        policy.add_page(2)
        policy.record_access(1)
        assert policy.select_victim() == 1

    def test_remove_page(self) -> None:
        """A removed page is no longer a candidate."""
        policy = FIFOPolicy()
        policy.add_page(1)
        policy.add_page(2)
        policy.remove_page(1)
        expected_victim = 2
        assert policy.select_victim() == expected_victim
        assert policy.resident == (expected_victim,)

    def test_empty_raises(self) -> None:
        """Selecting a victim with nothing resident is an IndexError."""
        with pytest.raises(IndexError):
            FIFOPolicy().select_victim()


# -- Reference scenario -------------------------------------------------------


class TestFifoReferenceString:
    """Replay the classic reference string with three frames."""

    def test_totals(self) -> None:
        """Ten faults and three hits."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        expected_faults = 10
        expected_hits = 3
        assert result.page_faults == expected_faults
        assert result.page_hits == expected_hits

    def test_hit_rate(self) -> None:
        """Hit rate is hits over references, as a percentage."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        assert result.hit_rate == pytest.approx(3 / 13 * 100)
        assert result.fault_rate == pytest.approx(10 / 13 * 100)

    def test_frame_trace(self) -> None:
        """Frames after each step, oldest arrival first."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        assert [step.frames for step in result.steps] == EXPECTED_FRAMES

    def test_fault_flags(self) -> None:
        """Each step records whether it faulted."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        assert [step.fault for step in result.steps] == EXPECTED_FAULTS

    def test_step_numbers_and_pages(self) -> None:
        """Steps are numbered from 1 and echo the referenced page."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        assert [step.step for step in result.steps] == list(range(1, len(REFERENCE_STRING) + 1))
        assert [step.page for step in result.steps] == REFERENCE_STRING

    def test_evictions(self) -> None:
        """The fourth reference evicts 7, the first page loaded."""
        result = fifo_page_replacement(REFERENCE_STRING, FRAMES)
        expected_victim = 7
        assert result.steps[3].evicted == expected_victim
        assert result.steps[4].evicted is None
        evictions = [step.evicted for step in result.steps if step.evicted is not None]
        assert evictions == [7, 0, 1, 2, 3, 0, 4]


# -- Properties ---------------------------------------------------------------


@pytest.mark.parametrize("frames", [1, 2, 3, 4, 7])
@pytest.mark.parametrize("pages", [REFERENCE_STRING, BELADY_STRING, [5], [0, 0, 0, 1]])
class TestFifoProperties:
    """Properties that hold for any reference string and frame count."""

    def test_faults_plus_hits(self, pages: list[int], frames: int) -> None:
        """Every reference is exactly one of fault or hit."""
        result = fifo_page_replacement(pages, frames)
        assert result.page_faults + result.page_hits == len(pages)

    def test_frames_never_exceed_capacity(self, pages: list[int], frames: int) -> None:
        """Resident pages never outnumber the frames."""
        result = fifo_page_replacement(pages, frames)
        assert all(len(step.frames) <= frames for step in result.steps)

    def test_occupancy_never_shrinks(self, pages: list[int], frames: int) -> None:
        """Once a frame is filled it stays filled."""
        result = fifo_page_replacement(pages, frames)
        sizes = [len(step.frames) for step in result.steps]
        assert sizes == sorted(sizes)

    def test_first_reference_faults(self, pages: list[int], frames: int) -> None:
        """The first occurrence of any page is always a fault."""
        result = fifo_page_replacement(pages, frames)
        seen: set[int] = set()
        for step in result.steps:
            if step.page not in seen:
                assert step.fault
                seen.add(step.page)

    def test_replay_is_identical(self, pages: list[int], frames: int) -> None:
        """Two replays of the same input produce identical traces."""
        assert fifo_page_replacement(pages, frames) == fifo_page_replacement(pages, frames)


# -- Boundaries ---------------------------------------------------------------


class TestFifoBoundaries:
    """Edge cases and Belady's anomaly."""

    def test_single_frame(self) -> None:
        """With one frame only immediate repeats are hits."""
        result = fifo_page_replacement([1, 1, 2, 1, 1], 1)
        assert [step.fault for step in result.steps] == [True, False, True, True, False]
        assert [step.frames for step in result.steps] == [(1,), (1,), (2,), (1,), (1,)]

    def test_more_frames_than_pages(self) -> None:
        """Nothing is ever evicted when every page fits."""
        result = fifo_page_replacement([1, 2, 3, 1], 10)
        expected_faults = 3
        assert result.page_faults == expected_faults
        assert all(step.evicted is None for step in result.steps)

    def test_page_zero_is_a_page(self) -> None:
        """Page 0 is tracked like any other page."""
        result = fifo_page_replacement([0, 0], 1)
        assert result.page_hits == 1

    def test_beladys_anomaly(self) -> None:
        """Four frames fault more often than three on this string."""
        three = fifo_page_replacement(BELADY_STRING, 3)
        four = fifo_page_replacement(BELADY_STRING, 4)
        expected_three = 9
        expected_four = 10
        assert three.page_faults == expected_three
        assert four.page_faults == expected_four

    def test_snapshots_are_values(self) -> None:
        """Earlier snapshots are not rewritten by later steps."""
        result = fifo_page_replacement([1, 2, 3], 2)
        assert result.steps[0].frames == (1,)
        assert isinstance(result.steps[0].frames, tuple)

    def test_to_dict(self) -> None:
        """The JSON view carries totals, rates, and steps."""
        data = fifo_page_replacement([1, 2, 1], 2).to_dict()
        expected_faults = 2
        assert data["page_faults"] == expected_faults
        assert data["page_hits"] == 1
        assert data["steps"][2] == {
            "step": 3,
            "page": 1,
            "frames": [1, 2],
            "fault": False,
            "evicted": None,
        }


class TestFifoValidation:
    """Malformed input is rejected before the replay starts."""

    def test_empty_pages(self) -> None:
        """An empty reference string is an error."""
        with pytest.raises(InvalidInputError, match="empty"):
            fifo_page_replacement([], 3)

    def test_zero_frames(self) -> None:
        """At least one frame is required."""
        with pytest.raises(InvalidInputError, match="frame_count"):
            fifo_page_replacement([1, 2], 0)

    def test_negative_page(self) -> None:
        """Page numbers can't be negative."""
        with pytest.raises(InvalidInputError, match="negative"):
            fifo_page_replacement([1, -2], 3)

    def test_non_integer_frames(self) -> None:
        """A fractional frame count is rejected."""
        with pytest.raises(InvalidInputError):
            fifo_page_replacement([1, 2], 2.5)  # type: ignore[arg-type]
