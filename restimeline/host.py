"""Host-side capabilities other than drawing.

`ViewportHost` receives layout side effects (scrollable extent, gutter
pinning). `TimelineEvents` is a small synchronous listener registry a host
can feed scroll/resize/click/contextmenu events into.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Protocol

logger = logging.getLogger(__name__)

EVENT_KINDS = ("scroll", "resize", "click", "contextmenu")


class ViewportHost(Protocol):
    def set_content_size(self, width: float, height: float) -> None:
        """Set the total scrollable extent of the timeline content."""

    def pin_viewport(self, scroll_x: int, scroll_y: int) -> None:
        """Keep the drawing surface (and its gutters) fixed over the scrolled content."""


class NullViewportHost:
    """Host that ignores layout side effects."""

    def set_content_size(self, width: float, height: float) -> None:
        return None

    def pin_viewport(self, scroll_x: int, scroll_y: int) -> None:
        return None


NULL_HOST = NullViewportHost()


class TimelineEvents:
    def __init__(self) -> None:
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

    def on(self, kind: str, handler: Callable[..., Any]) -> None:
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {kind!r} (expected one of {', '.join(EVENT_KINDS)})")
        self._listeners.setdefault(kind, []).append(handler)

    def off(self, kind: str, handler: Callable[..., Any]) -> None:
        handlers = self._listeners.get(kind)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._listeners[kind]

    def emit(self, kind: str, *args: Any) -> List[Any]:
        """Call every handler for kind in subscription order; return their results."""
        handlers = list(self._listeners.get(kind, ()))
        if not handlers:
            logger.debug("No listeners for %s event", kind)
        return [h(*args) for h in handlers]


__all__ = ["EVENT_KINDS", "NULL_HOST", "NullViewportHost", "TimelineEvents", "ViewportHost"]
