"""Simulator settings — defaults and bounds for the outer interfaces.

The engines take every parameter explicitly and have no configuration
of their own.  ``Settings`` only tells a front end (such as the web
API) what to use when the caller leaves something out, and which frame
counts to accept.
"""

from dataclasses import dataclass

from py_memsim.errors import InvalidInputError
from py_memsim.logging import LogLevel

# The classic textbook reference string.
DEFAULT_PAGES = (7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2)
DEFAULT_FRAMES = 3
MIN_FRAMES = 1
MAX_FRAMES = 10


@dataclass(frozen=True)
class Settings:
    """Defaults and limits for a simulator front end.

    Attributes:
        default_pages: Reference string used when none is given.
        default_frames: Frame count used when none is given.
        min_frames: Smallest frame count accepted.
        max_frames: Largest frame count accepted.
        log_level: Lowest level kept in the audit log.

    """

    default_pages: tuple[int, ...] = DEFAULT_PAGES
    default_frames: int = DEFAULT_FRAMES
    min_frames: int = MIN_FRAMES
    max_frames: int = MAX_FRAMES
    log_level: LogLevel = LogLevel.INFO

    def __post_init__(self) -> None:
        """Reject settings whose defaults fall outside their own bounds."""
        if not 1 <= self.min_frames <= self.max_frames:
            msg = f"Invalid frame bounds: {self.min_frames}..{self.max_frames}"
            raise InvalidInputError(msg)
        if not self.frames_in_range(self.default_frames):
            msg = f"default_frames {self.default_frames} outside {self.min_frames}..{self.max_frames}"
            raise InvalidInputError(msg)
        if not self.default_pages:
            msg = "default_pages must not be empty"
            raise InvalidInputError(msg)

    def frames_in_range(self, frames: int) -> bool:
        """Return True if *frames* lies within the accepted bounds."""
        return self.min_frames <= frames <= self.max_frames
