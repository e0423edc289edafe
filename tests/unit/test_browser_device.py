from __future__ import annotations

import pytest

from browser.analytics import AnalyticsTracker
from browser.device import DeviceCapabilities, StaticDetector, UserAgentDetector, detect_from_user_agent
from browser.gestures import swipe_direction, swipe_target
from browser.host import BrowserHost
from browser.state import page_from_path


IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
ANDROID_CHROME = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Mobile Safari/537.36"
DESKTOP_FIREFOX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"


def test_detect_iphone_safari():
    caps = detect_from_user_agent(IPHONE)
    assert caps.is_mobile and caps.is_ios and caps.is_safari
    assert not caps.is_android and not caps.is_chrome


def test_detect_android_chrome_is_not_safari():
    caps = detect_from_user_agent(ANDROID_CHROME)
    assert caps.is_mobile and caps.is_android and caps.is_chrome
    assert not caps.is_safari and not caps.is_ios


def test_detect_desktop_firefox():
    caps = UserAgentDetector(DESKTOP_FIREFOX).detect()
    assert caps == DeviceCapabilities(is_firefox=True)


def test_static_detector():
    caps = DeviceCapabilities(is_mobile=True, is_android=True)
    assert StaticDetector(caps).detect() is caps


@pytest.mark.parametrize(
    "path,page",
    [("/", "index"), ("/index.html", "index"), ("/features.html", "features"), ("/about.html", "about")],
)
def test_page_from_path(path: str, page: str):
    assert page_from_path(path) == page


def test_swipe_direction_threshold_and_dominance():
    assert swipe_direction(300, 100, 200, 110) == "left"
    assert swipe_direction(100, 100, 200, 90) == "right"
    assert swipe_direction(100, 100, 140, 100) is None  # under 50px
    assert swipe_direction(100, 100, 170, 200) is None  # mostly vertical


def test_swipe_targets_follow_page_order():
    assert swipe_target("features", "left") == "about.html"
    assert swipe_target("features", "right") == "index.html"
    assert swipe_target("index", "left") == "features.html"
    assert swipe_target("index", "right") is None
    assert swipe_target("about", "left") is None
    assert swipe_target("about", "right") == "features.html"


def test_analytics_forwards_to_page_hooks():
    gtag_calls = []
    data_layer: list = []
    host = BrowserHost("<html></html>", globals={"gtag": lambda *a: gtag_calls.append(a), "dataLayer": data_layer})
    tracker = AnalyticsTracker(host)

    host.advance(42)
    event = tracker.track("download_attempt", {"platform": "ios", "userAgent": DeviceCapabilities(is_ios=True)})

    assert event.timestamp_ms == 42
    assert event.data["userAgent"]["is_ios"] is True
    assert gtag_calls == [("event", "download_attempt", event.data)]
    assert data_layer == [{"event": "download_attempt", **event.data}]
    assert tracker.names() == ["download_attempt"]


def test_analytics_without_hooks_still_records():
    host = BrowserHost("<html></html>")
    tracker = AnalyticsTracker(host)
    tracker.track("navigation")
    assert tracker.events[0].data == {}
