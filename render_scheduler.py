"""
Image Editor v1.2 - Render Scheduler Module
===========================================
Frame-coalesced redraw scheduling for the crop overlay
"""

import asyncio
from typing import Callable, List, Optional
import config
from logger import get_logger

logger = get_logger(__name__)

DrawFn = Callable[[], None]

# === FRAME CLOCKS ===

class AsyncioFrameClock:
    """Frame boundaries on the running asyncio loop"""

    def __init__(self, interval: float = None, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval = config.FRAME_INTERVAL if interval is None else interval
        self._loop = loop

    def request_frame(self, callback: Callable[[], None]):
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self.interval, callback)

    def cancel_frame(self, handle):
        handle.cancel()

class ManualFrameClock:
    """Frame boundaries driven by explicit tick() calls (one rerun = one frame)"""

    def __init__(self):
        self._callbacks: List[Optional[Callable[[], None]]] = []
        self.frames = 0

    def request_frame(self, callback: Callable[[], None]) -> int:
        self._callbacks.append(callback)
        return len(self._callbacks) - 1

    def cancel_frame(self, handle: int):
        if 0 <= handle < len(self._callbacks):
            self._callbacks[handle] = None

    @property
    def pending(self) -> int:
        return sum(1 for cb in self._callbacks if cb is not None)

    def tick(self) -> int:
        """Fire every callback armed before this frame; returns how many ran"""
        callbacks, self._callbacks = self._callbacks, []
        self.frames += 1
        fired = 0
        for cb in callbacks:
            if cb is not None:
                cb()
                fired += 1
        return fired

# === SCHEDULER ===

class RenderScheduler:
    """
    At most one redraw per display frame

    request_redraw() arms a one-shot frame callback unless one is already
    armed. When the frame fires, the pending flag is cleared and the most
    recently supplied draw function runs; it reads the latest state itself,
    so the overlay never lags behind the pointer.
    """

    def __init__(self, clock=None):
        self.clock = clock or AsyncioFrameClock()
        self._handle = None
        self._draw_fn: Optional[DrawFn] = None
        self._closed = False
        self.redraw_count = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def request_redraw(self, draw_fn: DrawFn) -> bool:
        """Returns True if a new frame callback was armed"""
        if self._closed:
            logger.debug("Redraw requested after close; ignored")
            return False
        self._draw_fn = draw_fn
        if self._handle is not None:
            return False
        self._handle = self.clock.request_frame(self._on_frame)
        return True

    def _on_frame(self):
        self._handle = None
        draw_fn, self._draw_fn = self._draw_fn, None
        if self._closed or draw_fn is None:
            return
        self.redraw_count += 1
        try:
            draw_fn()
        except Exception as e:
            logger.error(f"Redraw failed: {e}", exc_info=True)

    def cancel(self):
        """Disarm a pending redraw without closing the scheduler"""
        if self._handle is not None:
            self.clock.cancel_frame(self._handle)
            self._handle = None
        self._draw_fn = None

    def close(self):
        """Session teardown: cancel and refuse further redraws"""
        self.cancel()
        self._closed = True
