"""
Press Tracking - Tells a short tap from a long press.

A press becomes a long press once it has been held for threshold_ms
without moving more than move_threshold_px on either axis. A long press
opens the read-only description of the card; a short tap selects or
places. One press produces at most one of the two.

Time is passed in by the caller (milliseconds), so the tracker needs
no timers and is driven the same way in tests and in a UI loop.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..engine_core.state import HistoricalEvent
from ..formatting import category_display_name, format_year

LONG_PRESS_THRESHOLD_MS = 500
MOVE_THRESHOLD_PX = 10


class PressOutcome(Enum):
    """How a press gesture ended."""
    SHORT = "short"
    LONG = "long"
    CANCELLED = "cancelled"


class PressTracker:
    """
    Tracks one press gesture at a time.

    Usage:
        tracker = PressTracker(on_long_press=show_details, on_short_press=select)
        tracker.press(x, y, now_ms)
        tracker.move(x, y)          # may cancel
        tracker.poll(now_ms)        # fires on_long_press once held long enough
        tracker.release(now_ms)     # fires on_short_press if nothing else did
    """

    def __init__(
        self,
        on_long_press: Callable[[], None] | None = None,
        on_short_press: Callable[[], None] | None = None,
        threshold_ms: int = LONG_PRESS_THRESHOLD_MS,
        move_threshold_px: float = MOVE_THRESHOLD_PX,
    ):
        self.on_long_press = on_long_press
        self.on_short_press = on_short_press
        self.threshold_ms = threshold_ms
        self.move_threshold_px = move_threshold_px

        self._start_pos: tuple[float, float] | None = None
        self._start_time: float | None = None
        self._long_fired = False

    @property
    def is_pressing(self) -> bool:
        return self._start_pos is not None and not self._long_fired

    def press(self, x: float, y: float, now_ms: float):
        """Finger or button down."""
        self._start_pos = (x, y)
        self._start_time = now_ms
        self._long_fired = False

    def move(self, x: float, y: float) -> bool:
        """
        Pointer moved. Returns True if the press is cancelled by it.

        Moving past the threshold lets the gesture become a scroll.
        """
        if self._start_pos is None:
            return False
        dx = abs(x - self._start_pos[0])
        dy = abs(y - self._start_pos[1])
        if dx > self.move_threshold_px or dy > self.move_threshold_px:
            self._reset()
            return True
        return False

    def poll(self, now_ms: float) -> bool:
        """Fire the long press if held long enough. Returns True when it fires."""
        if self._start_pos is None or self._long_fired:
            return False
        if now_ms - self._start_time < self.threshold_ms:
            return False
        self._long_fired = True
        if self.on_long_press:
            self.on_long_press()
        return True

    def release(self, now_ms: float) -> PressOutcome:
        """Finger or button up; resolves the gesture."""
        if self._start_pos is None:
            return PressOutcome.CANCELLED

        self.poll(now_ms)
        fired = self._long_fired
        self._reset()

        if fired:
            return PressOutcome.LONG
        if self.on_short_press:
            self.on_short_press()
        return PressOutcome.SHORT

    def leave(self):
        """Pointer left the card; abandons the press."""
        self._reset()

    def _reset(self):
        self._start_pos = None
        self._start_time = None
        self._long_fired = False


@dataclass(frozen=True)
class DescriptionView:
    """Read-only card details shown after a long press."""
    event_id: str
    title: str
    description: str
    category_label: str
    year_label: str | None = None  # Only for cards already on the timeline


def describe(event: HistoricalEvent, on_timeline: bool) -> DescriptionView:
    """Build the description view; hand cards keep their year hidden."""
    return DescriptionView(
        event_id=event.id,
        title=event.display_name,
        description=event.description,
        category_label=category_display_name(event.category),
        year_label=format_year(event.year) if on_timeline else None,
    )
