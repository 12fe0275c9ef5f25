"""Turn user-typed number lists into integer sequences.

Front ends collect sizes and reference strings as text such as
``"7, 0, 1, 2"``.  The engines only accept integer sequences, so this
module sits between the two:

- tokens are separated by commas and/or whitespace;
- empty tokens (``"1,,2"`` or a trailing comma) are skipped;
- anything else that isn't an integer is rejected, not dropped.

Range checks (positive sizes, frame bounds) stay with the engines and
the front end; parsing only guarantees "a non-empty list of ints".
"""

import re
from collections.abc import Sequence

from py_memsim.errors import InvalidInputError

_SEPARATORS = re.compile(r"[,\s]+")


def parse_numbers(text: str, *, field: str = "values") -> list[int]:
    """Parse a comma- or space-separated list of integers.

    Args:
        text: The raw user input.
        field: Name used in error messages.

    Returns:
        The parsed integers, in input order.

    Raises:
        InvalidInputError: If a token is not an integer or nothing
            was entered.

    """
    numbers: list[int] = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        try:
            numbers.append(int(token))
        except ValueError:
            msg = f"{field}: {token!r} is not a whole number"
            raise InvalidInputError(msg) from None
    if not numbers:
        msg = f"{field}: enter at least one number"
        raise InvalidInputError(msg)
    return numbers


def coerce_numbers(value: object, *, field: str) -> list[int]:
    """Accept either raw text or an already-decoded list of integers.

    JSON clients may send ``"7,0,1"`` or ``[7, 0, 1]``; both become
    ``[7, 0, 1]``.

    Raises:
        InvalidInputError: If *value* is neither, or holds a non-integer.

    """
    if isinstance(value, str):
        return parse_numbers(value, field=field)
    if isinstance(value, Sequence):
        numbers: list[int] = []
        for item in value:
            if not isinstance(item, int) or isinstance(item, bool):
                msg = f"{field}: {item!r} is not a whole number"
                raise InvalidInputError(msg)
            numbers.append(item)
        return numbers
    msg = f"{field} must be a list of integers or a comma-separated string"
    raise InvalidInputError(msg)
