from __future__ import annotations

from typing import List, Optional

from bs4 import Tag

from . import dom
from .host import BrowserHost
from .state import UiState


NAVBAR_SCROLLED_AT = 100
NAVBAR_HIDE_AFTER = 200
PARALLAX_INTENSITY = 0.3
DESKTOP_MIN_WIDTH = 768


class ScrollEffects:
    """
    Scroll-driven page effects.

    - reading progress bar width tracks scroll depth
    - navbar gets `scrolled` past 100px, hides while scrolling down past
      200px and reappears on scroll up
    - hero backgrounds move at a fraction of the scroll speed (parallax)
    """

    def __init__(self, host: BrowserHost, state: UiState) -> None:
        self._host = host
        self._state = state
        self._last_scroll_top = 0.0
        self.navbar: Optional[Tag] = None
        self.parallax: List[Tag] = []

    def setup(self) -> None:
        if not self._state.animations_enabled:
            return
        doc = self._host.document
        self.parallax = doc.select(".hero-gradient, .parallax-bg")
        self.navbar = doc.select_one("nav")

    def update(self) -> None:
        scroll_top = self._host.scroll_y
        self._state.scroll_position = scroll_top
        self.update_reading_progress()
        if self.navbar is not None:
            self._update_navbar(self.navbar, scroll_top)
        for el in self.parallax:
            self._update_parallax(el, scroll_top)
        self._last_scroll_top = scroll_top

    def update_reading_progress(self) -> None:
        bar = self._host.document.select_one(".reading-progress")
        if bar is None:
            return
        scrollable = self._host.max_scroll
        progress = (self._host.scroll_y / scrollable) * 100 if scrollable > 0 else 0.0
        dom.set_style(bar, width=f"{progress:g}%")

    def _update_navbar(self, navbar: Tag, scroll_top: float) -> None:
        if scroll_top > NAVBAR_SCROLLED_AT:
            dom.add_class(navbar, "scrolled")
            if scroll_top > self._last_scroll_top and scroll_top > NAVBAR_HIDE_AFTER:
                dom.set_style(navbar, transform="translateY(-100%)")
            else:
                dom.set_style(navbar, transform="translateY(0)")
        else:
            dom.remove_class(navbar, "scrolled")
            dom.set_style(navbar, transform="translateY(0)")

    def _update_parallax(self, el: Tag, scroll_top: float) -> None:
        if scroll_top <= self._host.offset_height(el):
            rate = scroll_top * -PARALLAX_INTENSITY
            dom.set_style(el, transform=f"translateY({rate:g}px)" if rate else "translateY(0px)")

    def update_responsive(self) -> None:
        menu = self._host.document.select_one("#navbar-sticky")
        if menu is not None and self._host.inner_width >= DESKTOP_MIN_WIDTH:
            dom.remove_class(menu, "hidden", "mobile-nav")
