from __future__ import annotations

from typing import Any, Callable, Optional

from .host import BrowserHost


class Throttle:
    """
    Leading-edge throttle on the host clock.

    - The first call runs immediately and opens a `limit_ms` window.
    - Calls made while the window is open are dropped (no trailing call).
    """

    def __init__(self, host: BrowserHost, func: Callable[..., Any], limit_ms: float) -> None:
        if limit_ms <= 0:
            raise ValueError("limit_ms must be > 0")
        self._host = host
        self._func = func
        self._limit_ms = limit_ms
        self._in_throttle = False

    def _release(self) -> None:
        self._in_throttle = False

    def __call__(self, *args: Any) -> None:
        if self._in_throttle:
            return
        self._func(*args)
        self._in_throttle = True
        self._host.set_timeout(self._release, self._limit_ms)


class Debounce:
    """Trailing-edge debounce: runs once `wait_ms` after the last call."""

    def __init__(self, host: BrowserHost, func: Callable[..., Any], wait_ms: float) -> None:
        if wait_ms <= 0:
            raise ValueError("wait_ms must be > 0")
        self._host = host
        self._func = func
        self._wait_ms = wait_ms
        self._timer: Optional[int] = None

    def __call__(self, *args: Any) -> None:
        self._host.clear_timeout(self._timer)

        def later() -> None:
            self._timer = None
            self._func(*args)

        self._timer = self._host.set_timeout(later, self._wait_ms)


def throttle(host: BrowserHost, func: Callable[..., Any], limit_ms: float) -> Throttle:
    return Throttle(host, func, limit_ms)


def debounce(host: BrowserHost, func: Callable[..., Any], wait_ms: float) -> Debounce:
    return Debounce(host, func, wait_ms)
