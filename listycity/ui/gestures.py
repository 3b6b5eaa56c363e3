"""Horizontal swipe detection over raw pointer events."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from listycity.constants import INVALID_POSITION
from listycity.domain.entities.city import City

logger = logging.getLogger(__name__)


class MotionAction(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class MotionEvent:
    """Pointer event in list-surface coordinates."""
    action: MotionAction
    x: float
    y: float


@dataclass
class SwipeGestureDetector:
    """Tracks one press/move/release sequence.

    A gesture becomes a swipe once the pointer has travelled more than
    swipe_threshold_px horizontally while staying within max_vertical_slop
    vertically. The flag only latches on; it is cleared by the next press,
    the release, or a cancel.
    """
    swipe_threshold_px: float = 200
    max_vertical_slop: float = 100.0
    down_x: float = 0.0
    down_y: float = 0.0
    down_pos: int = INVALID_POSITION
    down_city: Optional[City] = None
    swiping: bool = False

    def press(self, x: float, y: float, position: int, city: Optional[City] = None) -> None:
        self.down_x = x
        self.down_y = y
        self.down_pos = position
        self.down_city = city
        self.swiping = False

    def move(self, x: float, y: float) -> bool:
        """Returns True on the move that turns the gesture into a swipe."""
        dx = x - self.down_x
        dy = y - self.down_y
        if abs(dx) > self.swipe_threshold_px and abs(dy) < self.max_vertical_slop:
            started = not self.swiping
            self.swiping = True
            if started:
                logger.debug(f"Swipe started at row {self.down_pos} (dx={dx:.0f}, dy={dy:.0f})")
            return started
        return False

    def release(self) -> bool:
        """Returns whether the finished gesture was a swipe, and resets it."""
        was_swiping = self.swiping
        self.swiping = False
        return was_swiping

    def cancel(self) -> None:
        self.swiping = False

    @property
    def has_valid_position(self) -> bool:
        return self.down_pos != INVALID_POSITION and self.down_pos >= 0
