from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .host import BrowserHost


logger = logging.getLogger(__name__)


class AnalyticsEvent(BaseModel):
    name: str
    data: Dict[str, Any] = Field(default_factory=dict)
    timestamp_ms: float = 0.0


def _plain(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.model_dump() if isinstance(v, BaseModel) else v) for k, v in data.items()}


class AnalyticsTracker:
    """
    Records interaction events and forwards them to page-provided hooks.

    Notes
    - Every event is kept in `events` and logged.
    - If the host defines a callable `gtag`, it is called as
      `gtag("event", name, data)`.
    - If the host defines a `dataLayer` list, `{"event": name, **data}` is
      appended to it.
    """

    def __init__(self, host: BrowserHost) -> None:
        self._host = host
        self.events: List[AnalyticsEvent] = []

    def track(self, name: str, data: Optional[Dict[str, Any]] = None) -> AnalyticsEvent:
        payload = _plain(data or {})
        event = AnalyticsEvent(name=name, data=payload, timestamp_ms=self._host.now())
        self.events.append(event)

        gtag = self._host.globals.get("gtag")
        if callable(gtag):
            gtag("event", name, payload)

        logger.info("📊 Event tracked: %s %s", name, payload)

        data_layer = self._host.globals.get("dataLayer")
        if isinstance(data_layer, list):
            data_layer.append({"event": name, **payload})
        return event

    def names(self) -> List[str]:
        return [e.name for e in self.events]
