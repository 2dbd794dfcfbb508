"""Display-refresh scheduling.

A `FrameScheduler` runs a callback at the next display-refresh boundary and
lets the caller cancel a request that has not run yet. The engine uses it as
a single-flight redraw scheduler.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Callable, Dict, Hashable, Optional, Protocol

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Hashable:
        """Run callback on the next frame; return a handle for cancel_frame."""

    def cancel_frame(self, handle: Hashable) -> None:
        """Drop a pending request. Unknown or already-run handles are ignored."""


class ManualFrameScheduler:
    """Frames tick only when the host calls flush().

    Callbacks requested while a flush is running belong to the next frame.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)  # type: ignore[arg-type]

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self) -> int:
        """Run one frame's worth of callbacks; return how many ran."""
        batch = self._pending
        self._pending = {}
        for cb in batch.values():
            cb()
        return len(batch)


class AsyncioFrameScheduler:
    """Frames driven by an asyncio event loop at a fixed refresh interval."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, *, frame_interval: float = 1 / 60) -> None:
        self._loop = loop
        self.frame_interval = float(frame_interval)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> Any:
        return self._get_loop().call_later(self.frame_interval, callback)

    def cancel_frame(self, handle: Any) -> None:
        if isinstance(handle, asyncio.TimerHandle):
            handle.cancel()


__all__ = ["AsyncioFrameScheduler", "FrameCallback", "FrameScheduler", "ManualFrameScheduler"]
