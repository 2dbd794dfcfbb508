"""ResourceTimeline: dataset state, viewport state, selection and redraw scheduling.

All mutation happens inside host-delivered events (dataset calls, scroll,
resize, click). Drawing is deferred to the next frame of the injected
`FrameScheduler` and coalesced: scheduling a render cancels the pending one,
so at most one render is ever outstanding.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Hashable, Iterable, List, Optional, Tuple

from restimeline.config import DEFAULT_CONFIG, TimelineConfig
from restimeline.consumptions import ConsumptionIndex
from restimeline.frames import FrameScheduler
from restimeline.geometry import ViewportGeometry
from restimeline.host import NULL_HOST, TimelineEvents, ViewportHost
from restimeline.interaction import hit_test
from restimeline.model import Consumption, Resource, TimeRange, ViewportState
from restimeline.render import RenderFrame, RenderPipeline
from restimeline.surface import DrawingSurface
from restimeline.validate import raise_first, validate_consumptions, validate_resources, validate_time_range
from restimeline.window import VisibleWindow, compute_visible_window

logger = logging.getLogger(__name__)


class ResourceTimeline:
    def __init__(
        self,
        surface: DrawingSurface,
        frames: FrameScheduler,
        *,
        config: Optional[TimelineConfig] = None,
        host: Optional[ViewportHost] = None,
        pipeline: Optional[RenderPipeline] = None,
    ) -> None:
        self.surface = surface
        self.frames = frames
        self.config = config if config is not None else DEFAULT_CONFIG
        self.host = host if host is not None else NULL_HOST
        self.pipeline = pipeline if pipeline is not None else RenderPipeline()
        self._tz = self.config.tzinfo()

        self.resources: Tuple[Resource, ...] = ()
        self.time_range: Optional[TimeRange] = None
        self._index = ConsumptionIndex()
        self.viewport = ViewportState()
        self.selected_id: Optional[str] = None

        self._render_handle: Optional[Hashable] = None
        self._resize_handle: Optional[Hashable] = None

    # --- dataset -------------------------------------------------------------

    @property
    def consumptions(self) -> Tuple[Consumption, ...]:
        """All consumptions, ordered by start_time."""
        return self._index.ordered

    def set_resources(self, resources: Iterable[Resource]) -> None:
        items = tuple(resources)
        raise_first(validate_resources(items))
        self.resources = items
        # Consumptions must keep referencing a loaded resource.
        ids = {r.id for r in items}
        if any(c.resource_id not in ids for c in self._index.ordered):
            self._index = ConsumptionIndex(c for c in self._index.ordered if c.resource_id in ids)
            if self._index.get(self.selected_id) is None:
                self._set_selection(None)
        if self.time_range is not None:
            self.on_resize()

    def set_time_range(self, start: int, end: int) -> None:
        tr = TimeRange(start=start, end=end)
        raise_first(validate_time_range(tr))
        self.time_range = tr
        if self.resources:
            self.on_resize()

    def set_consumptions(self, consumptions: Iterable[Consumption]) -> None:
        """Replace all consumptions (any order). Renders, never resizes."""
        items = list(consumptions)
        raise_first(validate_consumptions(items, (r.id for r in self.resources)))
        self._index = ConsumptionIndex(items)
        if self._index.get(self.selected_id) is None:
            self.selected_id = None
        if self.viewport.is_sized:
            self.schedule_render()

    def consumptions_for(self, resource_id: str) -> List[Consumption]:
        return self._index.for_resource(resource_id)

    def get_selected_bar(self) -> Optional[Consumption]:
        return self._index.get(self.selected_id)

    def select(self, consumption_id: Optional[str]) -> Optional[Consumption]:
        """Select by id; unknown ids (and None) clear the selection."""
        cons = self._index.get(consumption_id)
        self._set_selection(cons)
        self.schedule_render()
        return cons

    def _set_selection(self, cons: Optional[Consumption]) -> None:
        new_id = cons.id if cons is not None else None
        if new_id != self.selected_id:
            if cons is not None:
                logger.debug("Selected consumption %s (resource=%s)", cons.id, cons.resource_id)
            else:
                logger.debug("Selection cleared")
        self.selected_id = new_id

    # --- derived state -------------------------------------------------------

    def geometry(self) -> ViewportGeometry:
        return ViewportGeometry(
            config=self.config,
            viewport=self.viewport,
            time_range=self.time_range,
            resource_count=len(self.resources),
        )

    def visible_window(self) -> Optional[VisibleWindow]:
        return compute_visible_window(self.geometry())

    def content_size(self) -> Tuple[float, float]:
        return self.geometry().content_size()

    def has_layout_data(self) -> bool:
        return bool(self.resources) and self.time_range is not None

    def is_ready(self) -> bool:
        return self.has_layout_data() and self.viewport.is_sized

    # --- host events ---------------------------------------------------------

    def attach(self, events: TimelineEvents) -> None:
        events.on("scroll", self.on_scroll)
        events.on("resize", self.on_resize)
        events.on("click", self.on_click)
        events.on("contextmenu", self.on_context_menu)

    def on_scroll(self, scroll_x: float, scroll_y: float) -> None:
        self.viewport = replace(self.viewport, scroll_x=max(0, int(scroll_x)), scroll_y=max(0, int(scroll_y)))
        self.host.pin_viewport(self.viewport.scroll_x, self.viewport.scroll_y)
        self.schedule_render()

    def on_resize(self) -> None:
        if self._resize_handle is not None:
            self.frames.cancel_frame(self._resize_handle)
            self._resize_handle = None
        if not self.has_layout_data():
            return

        width, height = self.surface.size()
        if width <= 0 or height <= 0:
            logger.debug("Surface not laid out yet (%sx%s); retrying next frame", width, height)
            self._resize_handle = self.frames.request_frame(self._retry_resize)
            return

        self.viewport = replace(self.viewport, width=int(width), height=int(height))
        self.host.set_content_size(*self.content_size())
        self.host.pin_viewport(self.viewport.scroll_x, self.viewport.scroll_y)
        self.schedule_render()

    def _retry_resize(self) -> None:
        self._resize_handle = None
        self.on_resize()

    def on_click(self, x: float, y: float) -> Optional[Consumption]:
        """Select the bar under viewport pixel (x, y), or clear the selection."""
        hit = None
        if self.has_layout_data():
            hit = hit_test(x, y, self.geometry(), self.resources, self._index)
        self._set_selection(hit)
        self.schedule_render()
        return hit

    def on_context_menu(self, *_args: Any) -> bool:
        """Return True: the host should suppress its context menu."""
        return True

    # --- rendering -----------------------------------------------------------

    @property
    def render_pending(self) -> bool:
        return self._render_handle is not None

    def schedule_render(self) -> None:
        if not self.is_ready():
            return
        if self._render_handle is not None:
            self.frames.cancel_frame(self._render_handle)
        self._render_handle = self.frames.request_frame(self._draw_frame)

    def _capture_frame(self) -> Optional[RenderFrame]:
        geo = self.geometry()
        window = compute_visible_window(geo)
        if window is None:
            return None
        return RenderFrame(
            geometry=geo,
            window=window,
            resources=self.resources,
            consumptions=self._index,
            selected_id=self.selected_id,
            tz=self._tz,
        )

    def _draw_frame(self) -> None:
        self._render_handle = None
        if not self.is_ready():
            return
        try:
            frame = self._capture_frame()
            if frame is None:
                return
            self.pipeline.run(self.surface, frame)
        except Exception:
            logger.exception("Render error; frame abandoned")


__all__ = ["ResourceTimeline"]
