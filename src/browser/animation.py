from __future__ import annotations

from typing import Callable, List, Optional

from bs4 import Tag

from . import dom
from .counters import CounterAnimation, animate_counter
from .host import BrowserHost
from .observer import VisibilityEntry, VisibilityObserver
from .state import UiState


ENTRANCE_SELECTOR = ".feature-card, .testimonial-card, .stat-number, h2, h3"
CARD_CLASSES = ("feature-card", "testimonial-card")
ENTRANCE_THRESHOLD = 0.1
ENTRANCE_BOTTOM_MARGIN = -50
STAGGER_S = 0.1
HERO_STAGGER_S = 0.2
COUNTER_THRESHOLD = 0.5


class EntranceAnimations:
    """
    One-shot fade-in of content as it scrolls into view.

    Elements start hidden and offset; the first time one is at least 10%
    visible (with the viewport bottom pulled up by 50px) it transitions in
    and is no longer observed. Cards are staggered by sibling index.
    """

    def __init__(self, host: BrowserHost, state: UiState) -> None:
        self._host = host
        self._state = state
        self.observer: Optional[VisibilityObserver] = None

    def setup(self) -> None:
        if not self._state.animations_enabled:
            return
        self.observer = VisibilityObserver(
            self._host,
            self._on_entries,
            threshold=ENTRANCE_THRESHOLD,
            bottom_margin=ENTRANCE_BOTTOM_MARGIN,
        )
        for el in self._host.document.select(ENTRANCE_SELECTOR):
            dom.set_style(el, opacity="0", transform="translateY(30px)")
            self.observer.observe(el)

    def _on_entries(self, entries: List[VisibilityEntry], observer: VisibilityObserver) -> None:
        for entry in entries:
            if entry.is_intersecting:
                self.animate_element(entry.target)
                observer.unobserve(entry.target)

    def animate_element(self, el: Tag) -> None:
        if not self._state.animations_enabled:
            dom.set_style(el, opacity="1", transform="none")
            return
        dom.set_style(el, transition="opacity 0.8s ease, transform 0.8s ease", opacity="1", transform="translateY(0)")
        if any(dom.has_class(el, c) for c in CARD_CLASSES):
            delay = dom.index_in_parent(el) * STAGGER_S
            dom.set_style(el, transition_delay=f"{delay:g}s")


class StatCounters:
    """Runs the count-up animation on each `.stat-number` once it is half visible."""

    def __init__(self, host: BrowserHost) -> None:
        self._host = host
        self.observer: Optional[VisibilityObserver] = None
        self.animations: List[CounterAnimation] = []

    def setup(self) -> None:
        stats = self._host.document.select(".stat-number")
        if not stats:
            return
        self.observer = VisibilityObserver(self._host, self._on_entries, threshold=COUNTER_THRESHOLD)
        for el in stats:
            self.observer.observe(el)

    def _on_entries(self, entries: List[VisibilityEntry], observer: VisibilityObserver) -> None:
        for entry in entries:
            if not entry.is_intersecting:
                continue
            observer.unobserve(entry.target)
            anim = animate_counter(self._host, entry.target)
            if anim is not None:
                self.animations.append(anim)


class LazyImages:
    """Swaps `data-src` into `src` when an image becomes visible."""

    def __init__(self, host: BrowserHost) -> None:
        self._host = host
        self.observer: Optional[VisibilityObserver] = None

    def setup(self) -> None:
        images = self._host.document.select("img[data-src]")
        if not images:
            return
        self.observer = VisibilityObserver(self._host, self._on_entries)
        for img in images:
            self.observer.observe(img)

    def _on_entries(self, entries: List[VisibilityEntry], observer: VisibilityObserver) -> None:
        for entry in entries:
            if entry.is_intersecting:
                img = entry.target
                img["src"] = img["data-src"]
                dom.add_class(img, "fade-in")
                observer.unobserve(img)


def setup_logo_hover(host: BrowserHost, state: UiState) -> None:
    def enter(event) -> None:
        if state.animations_enabled:
            dom.set_style(event.current_target, animation_duration="0.5s", animation_iteration_count="3")

    def leave(event) -> None:
        dom.set_style(event.current_target, animation_duration="3s", animation_iteration_count="infinite")

    for logo in host.document.select(".marine-logo"):
        host.add_event_listener(logo, "mouseenter", enter)
        host.add_event_listener(logo, "mouseleave", leave)


def setup_hero(host: BrowserHost, state: UiState) -> None:
    hero = host.document.select_one(".hero-gradient")
    if hero is None or not state.animations_enabled:
        return
    for i, button in enumerate(hero.select('a[class*="btn"], button')):
        dom.set_style(button, animation_delay=f"{i * HERO_STAGGER_S:g}s")
        dom.add_class(button, "animate-fade-in-up")


def setup_feature_cards(host: BrowserHost, state: UiState, on_click: Callable[[str], None]) -> None:
    def enter(event) -> None:
        icon = event.current_target.select_one(".icon-wrapper")
        if icon is not None and state.animations_enabled:
            dom.set_style(icon, animation="depth-pulse 1s ease-in-out infinite")

    def leave(event) -> None:
        icon = event.current_target.select_one(".icon-wrapper")
        if icon is not None:
            dom.set_style(icon, animation="")

    def click(event) -> None:
        title = event.current_target.select_one("h3")
        on_click(dom.text(title).strip() if title is not None else "unknown")

    for card in host.document.select(".feature-card"):
        host.add_event_listener(card, "mouseenter", enter)
        host.add_event_listener(card, "mouseleave", leave)
        host.add_event_listener(card, "click", click)
