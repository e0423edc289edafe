from __future__ import annotations

from typing import Optional

from bs4 import Tag

from . import dom
from .analytics import AnalyticsTracker
from .host import BrowserHost, Event, Location
from .state import UiState


SCROLL_OFFSET = 80
ACTIVE_SECTION_LINE = 100

MENU_OPEN_STYLE = {"max_height": "500px", "opacity": "1", "transition": "max-height 0.3s ease, opacity 0.3s ease"}
MENU_CLOSED_STYLE = {"max_height": "0", "opacity": "0"}


class Navigation:
    """Mobile menu toggle, in-page anchor scrolling and outbound link handling."""

    def __init__(self, host: BrowserHost, state: UiState, tracker: AnalyticsTracker) -> None:
        self._host = host
        self._state = state
        self._tracker = tracker
        self.toggle: Optional[Tag] = None
        self.menu: Optional[Tag] = None

    def setup(self) -> None:
        doc = self._host.document
        self.toggle = doc.select_one("[data-collapse-toggle]")
        self.menu = doc.select_one("#navbar-sticky")
        if self.toggle is not None and self.menu is not None:
            self._host.add_event_listener(self.toggle, "click", self.handle_toggle)

        for link in doc.select('a[href^="#"]'):
            self._host.add_event_listener(link, "click", self.handle_anchor_click)

        self.update_active_nav_item()

    # --------------- Mobile menu ---------------
    def handle_toggle(self, event: Event) -> None:
        event.prevent_default()
        if self.toggle is None or self.menu is None:
            return
        expanded = self.toggle.get("aria-expanded") == "true"
        self.toggle["aria-expanded"] = "false" if expanded else "true"
        dom.toggle_class(self.menu, "hidden")
        if not expanded:
            dom.add_class(self.menu, "mobile-nav")
            dom.set_style(self.menu, **MENU_OPEN_STYLE)
        else:
            dom.set_style(self.menu, **MENU_CLOSED_STYLE)

    # --------------- Links ---------------
    def handle_anchor_click(self, event: Event) -> None:
        link = event.current_target
        target_id = (link.get("href") or "#")[1:]
        if not target_id:
            return
        target = self._host.document.find(id=target_id)
        if target is not None:
            event.prevent_default()
            self.smooth_scroll_to(target)

    def smooth_scroll_to(self, el: Tag, offset: float = SCROLL_OFFSET) -> None:
        position = self._host.bounding_top(el) + self._host.scroll_y - offset
        self._host.scroll_to(position, smooth=self._state.animations_enabled)

    def handle_navigation(self, event: Event) -> None:
        """Document-level click handler: marks outbound links and tracks the click."""
        link = dom.closest(event.target, "a") if isinstance(event.target, Tag) else None
        if link is None:
            return
        href = self._host.location.resolve(link.get("href") or "")
        if Location(href).hostname != self._host.location.hostname:
            link["target"] = "_blank"
            link["rel"] = "noopener noreferrer"

        self._tracker.track(
            "navigation",
            {"from": self._host.location.pathname, "to": href, "text": dom.text(link).strip()},
        )

    # --------------- Active section ---------------
    def update_active_nav_item(self) -> None:
        doc = self._host.document
        current = ""
        for section in doc.select("section[id]"):
            if self._host.bounding_top(section) <= ACTIVE_SECTION_LINE:
                current = section["id"]
        for link in doc.select('nav a[href^="#"]'):
            dom.remove_class(link, "active")
            if (link.get("href") or "")[1:] == current and current:
                dom.add_class(link, "active")
        if current:
            self._state.active_section = current
