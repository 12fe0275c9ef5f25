"""Input validation shared by both simulation engines.

Every engine entry point checks its arguments *before* building any
working state.  A bad argument is reported immediately with
``InvalidInputError`` instead of being clamped or silently ignored:

- an empty block, process, or page sequence;
- a non-positive block or process size;
- a negative page number;
- a non-integer value (``bool`` counts as non-integer here, even though
  Python treats it as an ``int`` subclass).

``InvalidInputError`` subclasses ``ValueError`` so callers that already
handle ``ValueError`` keep working.
"""

from collections.abc import Sequence


class InvalidInputError(ValueError):
    """Raise when a simulation receives malformed input."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_sizes(values: Sequence[int], *, field: str) -> tuple[int, ...]:
    """Validate a sequence of positive sizes and return it as a tuple.

    Args:
        values: The sizes to check.
        field: Name used in error messages (e.g. ``"blocks"``).

    Returns:
        An immutable copy of the sizes.

    Raises:
        InvalidInputError: If the sequence is empty or any value is not
            a positive integer.

    """
    if len(values) == 0:
        msg = f"{field} must not be empty"
        raise InvalidInputError(msg)
    for index, value in enumerate(values):
        if not _is_int(value):
            msg = f"{field}[{index}] must be an integer, got {value!r}"
            raise InvalidInputError(msg)
        if value <= 0:
            msg = f"{field}[{index}] must be positive, got {value}"
            raise InvalidInputError(msg)
    return tuple(values)


def require_pages(pages: Sequence[int]) -> tuple[int, ...]:
    """Validate a page reference string and return it as a tuple.

    Page numbers may be zero (page 0 is a real page).

    Raises:
        InvalidInputError: If the string is empty or holds a negative
            or non-integer page number.

    """
    if len(pages) == 0:
        msg = "pages must not be empty"
        raise InvalidInputError(msg)
    for index, page in enumerate(pages):
        if not _is_int(page):
            msg = f"pages[{index}] must be an integer, got {page!r}"
            raise InvalidInputError(msg)
        if page < 0:
            msg = f"pages[{index}] must not be negative, got {page}"
            raise InvalidInputError(msg)
    return tuple(pages)


def require_frame_count(frame_count: int) -> int:
    """Validate the number of physical frames.

    Raises:
        InvalidInputError: If *frame_count* is not an integer >= 1.

    """
    if not _is_int(frame_count) or frame_count < 1:
        msg = f"frame_count must be an integer >= 1, got {frame_count!r}"
        raise InvalidInputError(msg)
    return frame_count
