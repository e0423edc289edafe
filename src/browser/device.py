from __future__ import annotations

import re
from typing import Protocol

from pydantic import BaseModel


class DeviceCapabilities(BaseModel):
    is_mobile: bool = False
    is_ios: bool = False
    is_android: bool = False
    is_safari: bool = False
    is_chrome: bool = False
    is_firefox: bool = False


class CapabilityDetector(Protocol):
    """Anything that can report the capabilities of the current device."""

    def detect(self) -> DeviceCapabilities: ...


_MOBILE = re.compile(r"Android|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE)
_IOS = re.compile(r"iPad|iPhone|iPod")
_ANDROID = re.compile(r"Android")
_SAFARI = re.compile(r"Safari")
_CHROME = re.compile(r"Chrome")
_FIREFOX = re.compile(r"Firefox")


def detect_from_user_agent(user_agent: str) -> DeviceCapabilities:
    """Classify a user-agent string. Heuristic; prefer feature tests where available."""
    ua = user_agent or ""
    chrome = bool(_CHROME.search(ua))
    return DeviceCapabilities(
        is_mobile=bool(_MOBILE.search(ua)),
        is_ios=bool(_IOS.search(ua)),
        is_android=bool(_ANDROID.search(ua)),
        is_safari=bool(_SAFARI.search(ua)) and not chrome,
        is_chrome=chrome,
        is_firefox=bool(_FIREFOX.search(ua)),
    )


class UserAgentDetector:
    def __init__(self, user_agent: str) -> None:
        self.user_agent = user_agent

    def detect(self) -> DeviceCapabilities:
        return detect_from_user_agent(self.user_agent)


class StaticDetector:
    """Fixed capabilities, e.g. from server-side hints or tests."""

    def __init__(self, capabilities: DeviceCapabilities) -> None:
        self.capabilities = capabilities

    def detect(self) -> DeviceCapabilities:
        return self.capabilities
