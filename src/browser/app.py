from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bs4 import Tag

from . import dom
from .accessibility import Accessibility
from .analytics import AnalyticsEvent, AnalyticsTracker
from .animation import EntranceAnimations, LazyImages, StatCounters, setup_feature_cards, setup_hero, setup_logo_hover
from .device import CapabilityDetector, DeviceCapabilities, UserAgentDetector
from .downloads import DownloadHandler, Platform
from .forms import FormHandler, FormSubmitter, SimulatedSubmitter
from .gestures import Direction, SwipeDetector, swipe_target
from .host import BrowserHost, Event
from .navigation import SCROLL_OFFSET, Navigation
from .scrolling import ScrollEffects
from .state import UiState, page_from_path
from .timing import debounce, throttle


logger = logging.getLogger(__name__)

SCROLL_THROTTLE_MS = 16
RESIZE_DEBOUNCE_MS = 250
SERVICE_WORKER_PATH = "/sw.js"
PREFETCH_RESOURCES = (
    "/features.html",
    "/about.html",
    "https://images.unsplash.com/photo-1559827260-dc66d52bef19?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80",
)


class MarineApp:
    """
    Page-lifetime controller for the Waves marketing pages.

    Construct one per page load with the host it runs against. Capability
    detection and form delivery are injectable; by default the user agent
    is matched heuristically and form submissions are simulated.

    Usage
    - `MarineApp(host)` binds window/document events immediately and sets
      up components now (document ready) or on `DOMContentLoaded`.
    - `track_event`, `announce` and `smooth_scroll_to` are the public
      helpers other page code may call on the instance.
    """

    def __init__(
        self,
        host: BrowserHost,
        *,
        detector: Optional[CapabilityDetector] = None,
        submitter: Optional[FormSubmitter] = None,
    ) -> None:
        self.host = host
        self.detector: CapabilityDetector = detector or UserAgentDetector(host.user_agent)
        self.submitter: FormSubmitter = submitter or SimulatedSubmitter()
        self.state = UiState(
            current_page=page_from_path(host.location.pathname),
            animations_enabled=not host.prefers_reduced_motion,
            device=self.detector.detect(),
        )
        self.analytics = AnalyticsTracker(host)
        self.navigation = Navigation(host, self.state, self.analytics)
        self.scroll_effects = ScrollEffects(host, self.state)
        self.entrance = EntranceAnimations(host, self.state)
        self.counters = StatCounters(host)
        self.lazy_images = LazyImages(host)
        self.accessibility = Accessibility(host)
        self.forms = FormHandler(host, self.submitter, on_success=self._form_submitted)
        self.downloads = DownloadHandler(host, lambda: self.state.device, on_attempt=self._download_attempted)
        self.swipes: Optional[SwipeDetector] = None
        self.components_ready = False

        logger.info("🌊 Waves Marine Navigation App Initialized")

        if host.ready_state == "loading":
            host.add_event_listener(host.document, "DOMContentLoaded", lambda e: self.initialize_components())
        else:
            self.initialize_components()

        self.bind_events()
        setup_logo_hover(host, self.state)
        self.entrance.setup()

    # --------------- Lifecycle ---------------
    def bind_events(self) -> None:
        host = self.host
        host.add_event_listener(host.window, "scroll", throttle(host, self.handle_scroll, SCROLL_THROTTLE_MS))
        host.add_event_listener(host.window, "resize", debounce(host, self.handle_resize, RESIZE_DEBOUNCE_MS))
        host.add_event_listener(host.window, "load", self.handle_page_load)
        host.add_event_listener(host.document, "click", self.navigation.handle_navigation)
        if self.state.device.is_mobile:
            self.swipes = SwipeDetector(host, self.handle_swipe)
            self.swipes.setup()

    def initialize_components(self) -> None:
        if self.components_ready:
            return
        self.components_ready = True
        self.navigation.setup()
        self.downloads.setup()
        self.scroll_effects.setup()
        self.forms.setup()
        self.accessibility.setup()

        page = self.state.current_page
        if page == "index":
            setup_hero(self.host, self.state)
            setup_feature_cards(self.host, self.state, self._feature_clicked)
        elif page == "about":
            self.counters.setup()

    def handle_scroll(self, event: Optional[Event] = None) -> None:
        self.scroll_effects.update()
        self.navigation.update_active_nav_item()

    def handle_resize(self, event: Optional[Event] = None) -> None:
        self.state.device = self.detector.detect()
        self.scroll_effects.update_responsive()

    def handle_page_load(self, event: Optional[Event] = None) -> None:
        dom.add_class(dom.body(self.host.document), "loaded")
        self.lazy_images.setup()
        self.setup_service_worker()
        self.preload_resources()

    def setup_service_worker(self) -> None:
        if not self.host.supports_service_worker:
            return
        try:
            registration = self.host.register_service_worker(SERVICE_WORKER_PATH)
        except RuntimeError as exc:
            logger.info("ServiceWorker registration failed: %s", exc)
            return
        logger.info("ServiceWorker registered: %s", registration)

    def preload_resources(self) -> List[Tag]:
        doc = self.host.document
        head = dom.head(doc)
        links = []
        for resource in PREFETCH_RESOURCES:
            link = dom.create_element(doc, "link", rel="prefetch", href=resource)
            head.append(link)
            links.append(link)
        return links

    # --------------- Interactions ---------------
    def handle_swipe(self, direction: Direction) -> None:
        target = swipe_target(self.state.current_page, direction)
        if target is not None:
            self.host.navigate(target)

    def handle_download(self, platform: Platform) -> None:
        self.downloads.handle_download(platform)

    def _download_attempted(self, platform: Platform) -> None:
        self.track_event(
            "download_attempt",
            {"platform": platform, "userAgent": self.state.device, "page": self.state.current_page},
        )

    def _feature_clicked(self, feature: str) -> None:
        self.track_event("feature_interaction", {"feature": feature, "page": self.state.current_page})

    def _form_submitted(self, form: Tag) -> None:
        self.track_event("form_submit", {"form": form.get("id") or "unknown", "page": self.state.current_page})

    # --------------- Public helpers ---------------
    def smooth_scroll_to(self, el: Tag, offset: float = SCROLL_OFFSET) -> None:
        self.navigation.smooth_scroll_to(el, offset)

    def announce(self, message: str) -> None:
        self.accessibility.announce(message)

    def track_event(self, name: str, data: Optional[Dict[str, Any]] = None) -> AnalyticsEvent:
        return self.analytics.track(name, data)

    @property
    def device(self) -> DeviceCapabilities:
        return self.state.device
