from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import Tag

from .host import BrowserHost


@dataclass
class VisibilityEntry:
    target: Tag
    is_intersecting: bool
    ratio: float


class VisibilityObserver:
    """
    Reports elements entering or leaving the viewport.

    - `threshold`: fraction of the element's height that must be inside the
      viewport for it to count as intersecting.
    - `bottom_margin`: grows (positive) or shrinks (negative) the bottom of
      the viewport, in px. A negative margin makes entries fire slightly
      before the element is fully scrolled in.

    Like the browser mechanism, the first check after `observe()` always
    reports the element's current state; afterwards only changes are
    reported.
    """

    def __init__(
        self,
        host: BrowserHost,
        callback: Callable[[List[VisibilityEntry], "VisibilityObserver"], None],
        *,
        threshold: float = 0.0,
        bottom_margin: float = 0.0,
    ) -> None:
        self._host = host
        self._callback = callback
        self.threshold = threshold
        self.bottom_margin = bottom_margin
        # id(el) -> (el, last reported state or None)
        self._targets: Dict[int, Tuple[Tag, Optional[bool]]] = {}
        host.register_observer(self)

    def observe(self, el: Tag) -> None:
        self._targets[id(el)] = (el, None)

    def unobserve(self, el: Tag) -> None:
        entry = self._targets.get(id(el))
        if entry is not None and entry[0] is el:
            del self._targets[id(el)]

    def disconnect(self) -> None:
        self._targets.clear()

    @property
    def observed(self) -> List[Tag]:
        return [el for el, _ in self._targets.values()]

    def _ratio(self, el: Tag) -> float:
        box = self._host.box(el)
        view_top = self._host.scroll_y
        view_bottom = view_top + self._host.inner_height + self.bottom_margin
        if box.height <= 0:
            return 1.0 if view_top <= box.top <= view_bottom else 0.0
        overlap = min(box.top + box.height, view_bottom) - max(box.top, view_top)
        return max(0.0, overlap) / box.height

    def check(self) -> None:
        entries: List[VisibilityEntry] = []
        for key, (el, last) in list(self._targets.items()):
            ratio = self._ratio(el)
            intersecting = ratio > 0 and ratio >= self.threshold
            if last is None or intersecting != last:
                self._targets[key] = (el, intersecting)
                entries.append(VisibilityEntry(target=el, is_intersecting=intersecting, ratio=ratio))
        if entries:
            self._callback(entries, self)
