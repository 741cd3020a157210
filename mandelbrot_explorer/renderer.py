"""
Asynchronous, slice-parallel Mandelbrot renderer.

The MandelbrotRenderer class handles:
- Single-flight rendering: at most one pass in flight, extra requests dropped
- Background (async) passes so the event loop stays responsive
- An optional progressive preview pass (one sample per block) for fast
  feedback while dragging
- A full-resolution pass split into contiguous row slices, one per worker
  of a thread pool that lives for the whole session
- Bounded completion wait, so a stuck or failing slice can never wedge
  the renderer in the rendering state
"""

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait

import numpy as np

from .budget import DEFAULT_BASE_ITER, DEFAULT_MAX_ITER_CAP, iteration_budget
from .colormaps import colorize
from .compute import compute_mandelbrot_partial, compute_mandelbrot_sampled


logger = logging.getLogger(__name__)

IDLE = "idle"
RENDERING = "rendering"


class RenderTimeout(RuntimeError):
    """Raised inside a pass whose slices did not finish in time."""


def split_rows(height, parts):
    """
    Partition [0, height) into contiguous, disjoint row ranges.

    Every slice gets height // parts rows and the last one also takes the
    remainder. Never returns more slices than rows.

    Returns:
        List of (start_row, end_row) tuples in ascending order
    """
    parts = max(1, min(parts, height))
    slice_height = height // parts
    slices = []
    for i in range(parts):
        start = i * slice_height
        end = height if i == parts - 1 else start + slice_height
        slices.append((start, end))
    return slices


class MandelbrotRenderer:
    """
    Renders a Viewport into an RGB framebuffer on a worker pool.

    Usage:
        renderer = MandelbrotRenderer(viewport)
        renderer.render(progressive=True)

        # In your game loop:
        image, bounds = renderer.get_result()
        if image is not None:
            display(image)

    Attributes:
        viewport: The live Viewport, snapshotted at the start of each pass
        framebuffer: uint8 (height, width, 3) array of the last published pass
        iterations: int32 (height, width) escape counts of the same pass
        bounds: Plane bounds the published framebuffer was computed for
        max_iter: Iteration budget of the published pass
        last_error: Exception of the most recent failed pass, or None
    """

    def __init__(self, viewport, base_iter=DEFAULT_BASE_ITER,
                 max_iter_cap=DEFAULT_MAX_ITER_CAP,
                 preview_stride=4, workers=None, timeout=60.0, executor=None):
        """
        Initialize the renderer.

        Args:
            viewport: Viewport to render
            base_iter: Iteration budget at the initial zoom level
            max_iter_cap: Upper bound for the zoom-dependent budget (None = unbounded)
            preview_stride: Block size of the progressive preview pass
            workers: Number of row slices / pool threads (None = CPU count)
            timeout: Seconds to wait for all slices before failing the pass
            executor: Optional executor to use instead of an owned pool
        """
        self.viewport = viewport
        self.base_iter = base_iter
        self.max_iter_cap = max_iter_cap
        self.preview_stride = preview_stride
        self.workers = workers or os.cpu_count() or 1
        self.timeout = timeout

        self._owns_executor = executor is None
        if executor is None:
            executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="mandelbrot-slice"
            )
        self.executor = executor

        # Published output
        self.framebuffer = None
        self.iterations = None
        self.bounds = None
        self.max_iter = None
        self.result_ready = False

        # Single-flight state
        self.lock = threading.Lock()
        self._state = IDLE
        self._idle = threading.Event()
        self._idle.set()

        self.render_count = 0
        self.failure_count = 0
        self.last_error = None
        self._listeners = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def state(self):
        return self._state

    @property
    def is_rendering(self):
        return self._state == RENDERING

    def add_listener(self, callback):
        """
        Register callback(framebuffer, final) for every publication.

        Called from the render thread after the preview pass (final=False)
        and after the full pass (final=True).
        """
        self._listeners.append(callback)

    def render(self, progressive=False):
        """
        Start a render pass unless one is already in flight.

        Args:
            progressive: Run the coarse preview pass before the full pass

        Returns:
            True if the pass was started, False if it was dropped
        """
        with self.lock:
            if self._state == RENDERING:
                logger.debug("Render dropped, pass already in flight")
                return False
            self._state = RENDERING
            self._idle.clear()

        try:
            snapshot = self.viewport.copy()
            thread = threading.Thread(
                target=self._render_thread,
                args=(snapshot, progressive),
                name="mandelbrot-render",
                daemon=True,
            )
            thread.start()
        except BaseException:
            self._finish()
            raise
        return True

    def wait_idle(self, timeout=None):
        """Block until no pass is in flight. Returns False on timeout."""
        return self._idle.wait(timeout)

    def get_result(self):
        """
        Get the latest published framebuffer if it has not been fetched yet.

        Returns:
            Tuple of (image copy, bounds) if a new result is ready,
            (None, None) otherwise.
        """
        with self.lock:
            if self.result_ready:
                self.result_ready = False
                return self.framebuffer.copy(), self.bounds
        return None, None

    def close(self):
        """Shut down the owned worker pool."""
        if self._owns_executor:
            self.executor.shutdown(wait=True, cancel_futures=True)

    def _render_thread(self, viewport, progressive):
        """Background thread running one complete pass."""
        started = time.perf_counter()
        try:
            self._run_pass(viewport, progressive)
        except Exception as exc:
            self.failure_count += 1
            self.last_error = exc
            logger.exception("Render of %r failed", viewport)
        else:
            self.render_count += 1
            self.last_error = None
            logger.debug("Render of %r finished in %.3fs",
                         viewport, time.perf_counter() - started)
        finally:
            self._finish()

    def _run_pass(self, viewport, progressive):
        height, width = viewport.height, viewport.width
        framebuffer = np.zeros((height, width, 3), dtype=np.uint8)
        iterations = np.zeros((height, width), dtype=np.int32)

        max_iter = iteration_budget(viewport, self.base_iter, self.max_iter_cap)

        if progressive:
            self._preview_pass(viewport, max_iter, iterations, framebuffer)
            self._publish(viewport, max_iter, iterations, framebuffer, final=False)

        executor = self.executor
        futures = [
            executor.submit(
                self._render_slice, viewport, max_iter,
                iterations, framebuffer, start, end
            )
            for start, end in split_rows(height, self.workers)
        ]
        done, not_done = wait(futures, timeout=self.timeout)
        if not_done:
            stuck = [future for future in not_done if not future.cancel()]
            if stuck:
                logger.warning("%d slices still running after %.1fs timeout",
                               len(stuck), self.timeout)
                self._replace_pool(executor)
            raise RenderTimeout(
                f"{len(not_done)} of {len(futures)} slices unfinished "
                f"after {self.timeout}s"
            )
        for future in done:
            future.result()

        self._publish(viewport, max_iter, iterations, framebuffer, final=True)

    def _replace_pool(self, stuck_executor):
        """
        Swap in a fresh pool after a timeout left slices running.

        The next pass would otherwise queue behind slices that outlived
        their timeout. Borrowed executors are left alone.
        """
        if not self._owns_executor:
            return
        with self.lock:
            self.executor = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="mandelbrot-slice"
            )
        stuck_executor.shutdown(wait=False, cancel_futures=True)
        logger.info("Replaced saturated slice pool")

    def _preview_pass(self, viewport, max_iter, iterations, framebuffer):
        """Fill every stride x stride block with the color of its top-left pixel."""
        stride = self.preview_stride
        height, width = viewport.height, viewport.width
        grid = compute_mandelbrot_sampled(
            viewport.x_min, viewport.x_max, viewport.y_min, viewport.y_max,
            width, height, max_iter, stride
        )
        colors = colorize(grid, max_iter)
        blocks = np.repeat(np.repeat(grid, stride, axis=0), stride, axis=1)
        iterations[:] = blocks[:height, :width]
        color_blocks = np.repeat(np.repeat(colors, stride, axis=0), stride, axis=1)
        framebuffer[:] = color_blocks[:height, :width]

    @staticmethod
    def _render_slice(viewport, max_iter, iterations, framebuffer, start, end):
        """Compute exact colors for rows [start, end). Runs on a pool thread."""
        compute_mandelbrot_partial(
            viewport.x_min, viewport.x_max, viewport.y_min, viewport.y_max,
            viewport.width, viewport.height, max_iter, iterations, start, end
        )
        framebuffer[start:end] = colorize(iterations[start:end], max_iter)

    def _publish(self, viewport, max_iter, iterations, framebuffer, final):
        with self.lock:
            self.framebuffer = framebuffer
            self.iterations = iterations
            self.bounds = viewport.bounds
            self.max_iter = max_iter
            self.result_ready = True
        for callback in list(self._listeners):
            callback(framebuffer, final)

    def _finish(self):
        with self.lock:
            self._state = IDLE
            self._idle.set()
