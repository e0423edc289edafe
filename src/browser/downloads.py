from __future__ import annotations

from typing import Callable, Dict, Literal, Optional

from bs4 import Tag

from . import dom
from .device import DeviceCapabilities
from .host import BrowserHost, Event


Platform = Literal["ios", "android"]

APP_STORE_URLS: Dict[str, str] = {
    "ios": "https://apps.apple.com/app/waves-marine-navigation/id123456789",
    "android": "https://play.google.com/store/apps/details?id=com.waves.marine",
}

MODAL_CLASS = "modal fixed inset-0 z-50 flex items-center justify-center p-4 bg-black bg-opacity-50"

_WAITLIST_HTML = """
<div class="bg-white rounded-lg max-w-md w-full p-6 marine-shadow">
  <div class="flex justify-between items-center mb-4">
    <h3 class="text-xl font-bold marine-gradient-text">Download Waves for {upper}</h3>
    <button class="modal-close text-gray-400 hover:text-gray-600"><i class="fas fa-times"></i></button>
  </div>
  <div class="text-center">
    <div class="mb-4"><i class="fab fa-{icon} text-4xl text-ocean-blue-600"></i></div>
    <p class="mb-6 text-gray-600">The Waves app is coming soon to {name}! Join our waitlist to be notified when it's available.</p>
    <div class="space-y-3">
      <button class="waitlist-join w-full btn-marine-primary py-3 px-6 rounded-lg text-white font-medium">Join Waitlist</button>
      <button class="modal-close w-full text-gray-500 hover:text-gray-700">Maybe Later</button>
    </div>
  </div>
</div>
"""

_QR_HTML = """
<div class="bg-white rounded-lg max-w-sm w-full p-6 marine-shadow text-center">
  <div class="mb-4">
    <h3 class="text-xl font-bold marine-gradient-text mb-2">Scan to Download</h3>
    <p class="text-gray-600 text-sm">Scan with your {device}</p>
  </div>
  <div class="bg-gray-100 p-4 rounded-lg mb-4">
    <div class="w-32 h-32 bg-gray-300 mx-auto rounded flex items-center justify-center"><i class="fas fa-qrcode text-4xl text-gray-500"></i></div>
  </div>
  <button class="modal-close text-gray-500 hover:text-gray-700 text-sm">Close</button>
</div>
"""


def button_platform(label: str) -> Optional[Platform]:
    if "iOS" in label or "Apple" in label:
        return "ios"
    if "Android" in label:
        return "android"
    return None


class DownloadHandler:
    """
    Routes app download clicks by device.

    Mobile visitors on the matching platform go straight to the store;
    other mobile visitors get the waitlist modal; desktop visitors get a
    QR code to scan with their phone.
    """

    def __init__(
        self,
        host: BrowserHost,
        device: Callable[[], DeviceCapabilities],
        *,
        on_attempt: Optional[Callable[[Platform], None]] = None,
    ) -> None:
        self._host = host
        self._device = device
        self._on_attempt = on_attempt

    def setup(self) -> None:
        doc = self._host.document
        candidates = list(doc.select('a[href="#"]'))
        candidates.extend(b for b in doc.select("button") if "Download" in dom.text(b))
        for el in candidates:
            platform = button_platform(dom.text(el))
            if platform is not None:
                self._host.add_event_listener(el, "click", lambda e, p=platform: self._click(e, p))

    def _click(self, event: Event, platform: Platform) -> None:
        event.prevent_default()
        self.handle_download(platform)

    def handle_download(self, platform: Platform) -> None:
        device = self._device()
        if device.is_mobile:
            if (platform == "ios" and device.is_ios) or (platform == "android" and device.is_android):
                self._host.navigate(APP_STORE_URLS[platform])
            else:
                self.show_modal(self.waitlist_modal(platform))
        else:
            self.show_modal(self.qr_modal(platform))
        if self._on_attempt:
            self._on_attempt(platform)

    def waitlist_modal(self, platform: Platform) -> Tag:
        html = _WAITLIST_HTML.format(
            upper=platform.upper(),
            icon="apple" if platform == "ios" else "android",
            name="iOS" if platform == "ios" else "Android",
        )
        return self._modal(html, "download-modal")

    def qr_modal(self, platform: Platform) -> Tag:
        html = _QR_HTML.format(device="iPhone" if platform == "ios" else "Android device")
        return self._modal(html, "qr-modal")

    def _modal(self, html: str, kind: str) -> Tag:
        modal = dom.create_element(self._host.document, "div", class_=f"{MODAL_CLASS} {kind}")
        modal["role"] = "dialog"
        dom.set_html(modal, html.strip())
        return modal

    def show_modal(self, modal: Tag) -> None:
        dom.body(self._host.document).append(modal)
        for button in modal.select(".modal-close"):
            self._host.add_event_listener(button, "click", lambda e, m=modal: m.extract())
