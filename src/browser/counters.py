from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from bs4 import Tag

from . import dom
from .host import BrowserHost


DURATION_MS = 2000.0

_COUNTER = re.compile(r"^(?P<prefix>\D*?)(?P<num>\d[\d,]*(?:\.(?P<frac>\d+))?)(?P<suffix>\D*)$", re.DOTALL)


@dataclass(frozen=True)
class CounterFormat:
    """
    Display format of a stat counter such as "1.5K+", "$2M" or "99.9%".

    `target` is expressed in units of the last displayed digit, so "1.5K+"
    has target 15 with one decimal. Interpolating integer units keeps every
    frame exact and the last frame identical to the source text. Text
    around the number is carried through unchanged.
    """

    target: int
    decimals: int = 0
    prefix: str = ""
    suffix: str = ""
    grouped: bool = False

    def render(self, units: int) -> str:
        scale = 10 ** self.decimals
        whole, frac = divmod(units, scale)
        number = f"{whole:,}" if self.grouped else str(whole)
        if self.decimals:
            number = f"{number}.{frac:0{self.decimals}d}"
        return self.prefix + number + self.suffix


def parse_counter(text: str) -> Optional[CounterFormat]:
    """Parse counter text, or None when it cannot be counted up to exactly.

    Text with no number, more than one number, or a number that does not
    print back the same way (leading zeros, irregular grouping) is None.
    """
    m = _COUNTER.match(text)
    if not m:
        return None
    num = m.group("num")
    fmt = CounterFormat(
        target=int(num.replace(",", "").replace(".", "")),
        decimals=len(m.group("frac") or ""),
        prefix=m.group("prefix"),
        suffix=m.group("suffix"),
        grouped="," in num,
    )
    if fmt.render(fmt.target) != text:
        return None
    return fmt


class CounterAnimation:
    """Counts an element's text up from zero to its parsed target."""

    def __init__(
        self,
        host: BrowserHost,
        el: Tag,
        fmt: CounterFormat,
        *,
        duration_ms: float = DURATION_MS,
        on_frame: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._host = host
        self._el = el
        self.fmt = fmt
        self._duration = duration_ms
        self._on_frame = on_frame
        self._start: Optional[float] = None
        self.frames: List[str] = []
        self.done = False

    def start(self) -> None:
        self._start = self._host.now()
        self._host.request_animation_frame(self._frame)

    def _frame(self, now: float) -> None:
        start = self._start if self._start is not None else now
        elapsed = min(now - start, self._duration)
        progress = elapsed / self._duration
        units = math.floor(elapsed * self.fmt.target / self._duration)
        value = self.fmt.render(units)
        dom.set_text(self._el, value)
        self.frames.append(value)
        if self._on_frame:
            self._on_frame(value)
        if progress < 1:
            self._host.request_animation_frame(self._frame)
        else:
            self.done = True


def animate_counter(host: BrowserHost, el: Tag, *, duration_ms: float = DURATION_MS) -> Optional[CounterAnimation]:
    fmt = parse_counter(dom.text(el))
    if fmt is None:
        return None
    anim = CounterAnimation(host, el, fmt, duration_ms=duration_ms)
    anim.start()
    return anim
