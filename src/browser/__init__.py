"""
Interactive behaviors for the Waves marketing pages.

A `MarineApp` is constructed per page load against a `BrowserHost` (the
window/document it drives) and wires navigation, scroll effects, entrance
animations, stat counters, form validation, accessibility helpers, swipe
navigation, download routing and analytics onto the document.
"""

from .app import MarineApp
from .device import CapabilityDetector, DeviceCapabilities, UserAgentDetector
from .forms import HttpFormSubmitter, SimulatedSubmitter, SubmissionResult
from .host import BrowserHost
from .state import UiState

__all__ = [
    "MarineApp",
    "BrowserHost",
    "UiState",
    "CapabilityDetector",
    "DeviceCapabilities",
    "UserAgentDetector",
    "HttpFormSubmitter",
    "SimulatedSubmitter",
    "SubmissionResult",
]
