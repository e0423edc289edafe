from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from . import dom


FRAME_MS = 16.0


class Window:
    """Event target standing in for the browser window."""

    def __repr__(self) -> str:
        return "<window>"


Target = Union[Tag, Window]
Listener = Callable[["Event"], None]


@dataclass
class Touch:
    client_x: float
    client_y: float


@dataclass
class Event:
    type: str
    target: Optional[Target] = None
    current_target: Optional[Target] = None
    key: Optional[str] = None
    touches: List[Touch] = field(default_factory=list)
    changed_touches: List[Touch] = field(default_factory=list)
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class Box:
    top: float = 0.0
    height: float = 0.0


class Location:
    def __init__(self, href: str) -> None:
        self.href = href

    @property
    def pathname(self) -> str:
        return urlparse(self.href).path or "/"

    @property
    def hostname(self) -> str:
        return urlparse(self.href).hostname or ""

    def resolve(self, href: str) -> str:
        return urljoin(self.href, href)


class BrowserHost:
    """
    The window and document a page controller runs against.

    Notes
    - Time is virtual: `advance(ms)` runs due timers and animation frames in
      deadline order, then re-evaluates visibility observers.
    - Layout is explicit: elements have no geometry until `set_box` gives
      them a document-relative top and a height; unknown elements sit at
      the top of the page with zero height.
    - Events bubble from the target through its ancestors to the document
      and finally the window.
    - `globals` holds page-provided hooks such as `gtag` and `dataLayer`.
    """

    def __init__(
        self,
        document: Union[BeautifulSoup, str],
        *,
        url: str = "https://waves.seawater.io/index.html",
        user_agent: str = "",
        inner_width: int = 1280,
        inner_height: int = 800,
        scroll_height: Optional[float] = None,
        prefers_reduced_motion: bool = False,
        ready_state: str = "complete",
        supports_service_worker: bool = False,
        globals: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.document = dom.parse(document) if isinstance(document, str) else document
        self.window = Window()
        self.location = Location(url)
        self.user_agent = user_agent
        self.inner_width = inner_width
        self.inner_height = inner_height
        self.scroll_height = float(scroll_height if scroll_height is not None else inner_height)
        self.scroll_y = 0.0
        self.prefers_reduced_motion = prefers_reduced_motion
        self.ready_state = ready_state
        self.supports_service_worker = supports_service_worker
        self.service_worker_error: Optional[str] = None
        self.registered_workers: List[str] = []
        self.globals: Dict[str, Any] = globals if globals is not None else {}
        self.navigations: List[str] = []
        self.scroll_calls: List[Tuple[float, str]] = []

        self._now = 0.0
        self._seq = itertools.count()
        self._timer_ids = itertools.count(1)
        self._timers: List[Tuple[float, int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._listeners: Dict[int, Tuple[Target, Dict[str, List[Listener]]]] = {}
        self._boxes: Dict[int, Tuple[Tag, Box]] = {}
        self._observers: List[Any] = []

    # --------------- Clock & timers ---------------
    def now(self) -> float:
        return self._now

    def set_timeout(self, callback: Callable[[], None], delay_ms: float = 0.0) -> int:
        timer_id = next(self._timer_ids)
        due = self._now + max(0.0, delay_ms)
        heapq.heappush(self._timers, (due, next(self._seq), timer_id, callback))
        return timer_id

    def clear_timeout(self, timer_id: Optional[int]) -> None:
        if timer_id is not None:
            self._cancelled.add(timer_id)

    def request_animation_frame(self, callback: Callable[[float], None]) -> int:
        return self.set_timeout(lambda: callback(self._now), FRAME_MS)

    def advance(self, ms: float = 0.0) -> None:
        """Move the clock forward, running everything that falls due."""
        deadline = self._now + max(0.0, ms)
        while self._timers and self._timers[0][0] <= deadline:
            due, _, timer_id, callback = heapq.heappop(self._timers)
            if timer_id in self._cancelled:
                self._cancelled.discard(timer_id)
                continue
            self._now = due
            callback()
        self._now = deadline
        self.check_visibility()

    def pending_timers(self) -> int:
        return sum(1 for t in self._timers if t[2] not in self._cancelled)

    # --------------- Events ---------------
    def add_event_listener(self, target: Target, event_type: str, listener: Listener) -> None:
        entry = self._listeners.setdefault(id(target), (target, {}))
        entry[1].setdefault(event_type, []).append(listener)

    def _propagation_path(self, target: Target) -> List[Target]:
        if isinstance(target, Window):
            return [target]
        path: List[Target] = [target]
        path.extend(target.parents)
        if path[-1] is self.document:
            path.append(self.window)
        return path

    def dispatch(self, target: Target, event_type: str, **fields: Any) -> Event:
        event = Event(type=event_type, target=target, **fields)
        for node in self._propagation_path(target):
            entry = self._listeners.get(id(node))
            if entry is None or entry[0] is not node:
                continue
            event.current_target = node
            for listener in list(entry[1].get(event_type, [])):
                listener(event)
            if event.propagation_stopped:
                break
        return event

    def dom_content_loaded(self) -> None:
        self.ready_state = "interactive"
        self.dispatch(self.document, "DOMContentLoaded")

    def load(self) -> None:
        self.ready_state = "complete"
        self.dispatch(self.window, "load")

    # --------------- Layout & scrolling ---------------
    def set_box(self, el: Tag, *, top: float, height: float) -> None:
        self._boxes[id(el)] = (el, Box(top=top, height=height))

    def box(self, el: Tag) -> Box:
        entry = self._boxes.get(id(el))
        if entry is None or entry[0] is not el:
            return Box()
        return entry[1]

    def bounding_top(self, el: Tag) -> float:
        """Top edge relative to the viewport (getBoundingClientRect().top)."""
        return self.box(el).top - self.scroll_y

    def offset_height(self, el: Tag) -> float:
        return self.box(el).height

    @property
    def max_scroll(self) -> float:
        return max(0.0, self.scroll_height - self.inner_height)

    def scroll_to(self, top: float, *, smooth: bool = False) -> None:
        self.scroll_calls.append((top, "smooth" if smooth else "auto"))
        self.scroll_y = min(max(0.0, top), self.max_scroll)
        self.dispatch(self.window, "scroll")
        self.check_visibility()

    def resize(self, width: int, height: Optional[int] = None) -> None:
        self.inner_width = width
        if height is not None:
            self.inner_height = height
        self.dispatch(self.window, "resize")
        self.check_visibility()

    # --------------- Visibility observation ---------------
    def register_observer(self, observer: Any) -> None:
        if not any(o is observer for o in self._observers):
            self._observers.append(observer)

    def check_visibility(self) -> None:
        for observer in list(self._observers):
            observer.check()

    # --------------- Navigation & workers ---------------
    def navigate(self, href: str) -> None:
        resolved = self.location.resolve(href)
        self.navigations.append(resolved)
        self.location = Location(resolved)

    def register_service_worker(self, path: str) -> str:
        if self.service_worker_error:
            raise RuntimeError(self.service_worker_error)
        self.registered_workers.append(path)
        return path
