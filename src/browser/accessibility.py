from __future__ import annotations

from typing import Optional

from bs4 import Tag

from . import dom
from .host import BrowserHost, Event


LIVE_REGION_ID = "live-region"
ANNOUNCE_CLEAR_MS = 1000
INTERACTIVE = "button, a, input, textarea, select, [tabindex]"

SKIP_LINK_HIDDEN = {"top": "-40px", "opacity": "0"}
SKIP_LINK_SHOWN = {"top": "6px", "opacity": "1"}
SKIP_LINK_BASE = {
    "position": "absolute",
    "left": "6px",
    "background": "var(--ocean-blue-600)",
    "color": "white",
    "padding": "8px",
    "text-decoration": "none",
    "border-radius": "4px",
    "z-index": "1000",
    "transition": "opacity 0.3s, top 0.3s",
}


class Accessibility:
    """Keyboard handling, focus order, screen-reader announcements and the skip link."""

    def __init__(self, host: BrowserHost) -> None:
        self._host = host
        self._clear_timer: Optional[int] = None

    def setup(self) -> None:
        doc = self._host.document
        self._host.add_event_listener(doc, "keydown", self.handle_keydown)
        self._host.add_event_listener(doc, "mousedown", self._clear_keyboard_mode)
        self.setup_focus_management()
        self.setup_live_region()
        self.setup_skip_link()

    # --------------- Keyboard ---------------
    def handle_keydown(self, event: Event) -> None:
        if event.key == "Escape":
            modal = self._host.document.select_one(".modal:not(.hidden)")
            if modal is not None:
                self.close_modal(modal)
        elif event.key == "Tab":
            dom.add_class(dom.body(self._host.document), "keyboard-navigation")

    def _clear_keyboard_mode(self, event: Event) -> None:
        dom.remove_class(dom.body(self._host.document), "keyboard-navigation")

    def close_modal(self, modal: Tag) -> None:
        dom.add_class(modal, "hidden")
        modal["aria-hidden"] = "true"

    # --------------- Focus ---------------
    def setup_focus_management(self) -> None:
        for el in self._host.document.select(INTERACTIVE):
            if not el.get("tabindex") and el.name not in ("input", "textarea"):
                el["tabindex"] = "0"

    # --------------- Live region ---------------
    def setup_live_region(self) -> Tag:
        doc = self._host.document
        region = doc.find(id=LIVE_REGION_ID)
        if region is None:
            region = dom.create_element(doc, "div", id=LIVE_REGION_ID, class_="sr-only")
            region["aria-live"] = "polite"
            region["aria-atomic"] = "true"
            dom.body(doc).append(region)
        return region

    def announce(self, message: str) -> None:
        region = self._host.document.find(id=LIVE_REGION_ID)
        if region is None:
            return
        dom.set_text(region, message)
        self._host.clear_timeout(self._clear_timer)
        self._clear_timer = self._host.set_timeout(lambda: dom.set_text(region, ""), ANNOUNCE_CLEAR_MS)

    # --------------- Skip link ---------------
    def setup_skip_link(self) -> Tag:
        doc = self._host.document
        link = dom.create_element(doc, "a", text="Skip to main content", href="#main-content", class_="skip-to-content")
        for prop, value in {**SKIP_LINK_BASE, **SKIP_LINK_HIDDEN}.items():
            dom.set_style(link, **{prop: value})
        self._host.add_event_listener(link, "focus", lambda e: dom.set_style(link, **SKIP_LINK_SHOWN))
        self._host.add_event_listener(link, "blur", lambda e: dom.set_style(link, **SKIP_LINK_HIDDEN))
        dom.body(doc).insert(0, link)
        return link
