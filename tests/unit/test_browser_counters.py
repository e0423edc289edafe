from __future__ import annotations

import re
from typing import List

from browser import dom
from browser.counters import CounterFormat, animate_counter, parse_counter
from browser.host import BrowserHost


def _numeric(text: str) -> float:
    return float(re.sub(r"[^\d.]", "", text))


def test_parse_counter_formats():
    assert parse_counter("1.5K+") == CounterFormat(target=15, decimals=1, suffix="K+")
    assert parse_counter("500+") == CounterFormat(target=500, suffix="+")
    assert parse_counter("$2M") == CounterFormat(target=2, prefix="$", suffix="M")
    assert parse_counter("12,000") == CounterFormat(target=12000, grouped=True)
    assert parse_counter("no digits") is None


def test_uncountable_text_is_left_alone():
    assert parse_counter("24/7") is None
    assert parse_counter("007") is None
    assert parse_counter("10,00") is None


def test_render_is_exact_at_target():
    for text in ("1.5K+", "500+", "2M", "12,000", "0.25M", "99.9%", "$2M", " 1,250.50 "):
        fmt = parse_counter(text)
        assert fmt is not None
        assert fmt.render(fmt.target) == text


def test_counter_animates_to_exact_text_monotonically():
    host = BrowserHost('<div class="stat-number" id="s">1.5K+</div>')
    el = host.document.find(id="s")

    anim = animate_counter(host, el)
    assert anim is not None

    seen: List[str] = []
    while not anim.done:
        host.advance(16)
        seen.append(dom.text(el))

    assert dom.text(el) == "1.5K+"
    assert seen[-1] == "1.5K+"
    assert seen[0] == "0.0K+"
    values = [_numeric(t) for t in seen]
    assert values == sorted(values)
    assert all(t.endswith("K+") for t in seen)
    # roughly 2 seconds of frames
    assert 120 <= len(seen) <= 130


def test_counter_midpoint_is_interpolated():
    host = BrowserHost('<span id="s">1,000</span>')
    el = host.document.find(id="s")
    animate_counter(host, el)

    host.advance(1008)  # 63 frames, progress 1008 / 2000
    assert dom.text(el) == "504"
    host.advance(2000)
    assert dom.text(el) == "1,000"


def test_counter_without_digits_is_skipped():
    host = BrowserHost('<span id="s">Many</span>')
    assert animate_counter(host, host.document.find(id="s")) is None
    assert host.pending_timers() == 0


def test_counter_keeps_text_around_the_number():
    host = BrowserHost('<div><span id="uptime">99.9%</span><span id="raised">$2M</span></div>')
    uptime = host.document.find(id="uptime")
    raised = host.document.find(id="raised")
    animate_counter(host, uptime)
    animate_counter(host, raised)

    host.advance(1008)
    assert dom.text(uptime).endswith("%")
    assert dom.text(raised).startswith("$")

    host.advance(1100)
    assert dom.text(uptime) == "99.9%"
    assert dom.text(raised) == "$2M"
