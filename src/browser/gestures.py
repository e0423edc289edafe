from __future__ import annotations

from typing import Callable, Literal, Optional

from .host import BrowserHost, Event
from .state import PAGE_ORDER, Page


SWIPE_THRESHOLD = 50

Direction = Literal["left", "right"]


def swipe_direction(start_x: float, start_y: float, end_x: float, end_y: float) -> Optional[Direction]:
    """Classify a touch as a horizontal swipe, or None.

    The horizontal distance must dominate the vertical one and exceed the
    threshold. Moving the finger leftwards is a "left" swipe.
    """
    dx = start_x - end_x
    dy = start_y - end_y
    if abs(dx) <= abs(dy) or abs(dx) <= SWIPE_THRESHOLD:
        return None
    return "left" if dx > 0 else "right"


def swipe_target(page: Page, direction: Direction) -> Optional[str]:
    """Page to open after a swipe: left goes forward, right goes back."""
    i = PAGE_ORDER.index(page)
    if direction == "left" and i < len(PAGE_ORDER) - 1:
        return f"{PAGE_ORDER[i + 1]}.html"
    if direction == "right" and i > 0:
        return f"{PAGE_ORDER[i - 1]}.html"
    return None


class SwipeDetector:
    def __init__(self, host: BrowserHost, on_swipe: Callable[[Direction], None]) -> None:
        self._host = host
        self._on_swipe = on_swipe
        self._start: Optional[tuple[float, float]] = None

    def setup(self) -> None:
        doc = self._host.document
        self._host.add_event_listener(doc, "touchstart", self._touch_start)
        self._host.add_event_listener(doc, "touchend", self._touch_end)

    def _touch_start(self, event: Event) -> None:
        if event.touches:
            t = event.touches[0]
            self._start = (t.client_x, t.client_y)

    def _touch_end(self, event: Event) -> None:
        if self._start is None or not event.changed_touches:
            return
        end = event.changed_touches[0]
        direction = swipe_direction(self._start[0], self._start[1], end.client_x, end.client_y)
        self._start = None
        if direction is not None:
            self._on_swipe(direction)
