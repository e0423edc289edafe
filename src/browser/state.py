from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .device import DeviceCapabilities


Page = Literal["index", "features", "about"]

# Swipe navigation order
PAGE_ORDER: tuple[Page, ...] = ("index", "features", "about")


def page_from_path(pathname: str) -> Page:
    if "features" in pathname:
        return "features"
    if "about" in pathname:
        return "about"
    return "index"


class UiState(BaseModel):
    """
    Per-page-load UI state. Recreated on every load; never persisted.

    Fields
    - current_page: page identifier derived from the URL path.
    - active_section: id of the section currently highlighted in the nav.
    - scroll_position: last scroll offset seen by the scroll handler (px).
    - animations_enabled: False when the host asks for reduced motion.
    - device: detected device/browser capabilities.
    """

    current_page: Page = "index"
    active_section: str = "home"
    scroll_position: float = 0.0
    is_loading: bool = False
    animations_enabled: bool = True
    device: DeviceCapabilities = Field(default_factory=DeviceCapabilities)
