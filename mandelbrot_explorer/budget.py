"""Zoom-dependent iteration budget."""


DEFAULT_BASE_ITER = 500
DEFAULT_MAX_ITER_CAP = 20000


def iteration_budget(viewport, base_iter=DEFAULT_BASE_ITER, max_iter_cap=None):
    """
    Maximum iteration count for the current zoom level.

    The budget grows with the inverse of the visible plane width, so deeper
    zooms resolve finer boundary structure. It never drops below base_iter
    and, when max_iter_cap is given, never exceeds it.

    Args:
        viewport: Viewport whose x extent defines the zoom level
        base_iter: Budget at and above a plane width of 1.0
        max_iter_cap: Optional upper bound (None = unbounded)

    Returns:
        int iteration budget
    """
    zoom_level = viewport.x_max - viewport.x_min
    budget = max(base_iter, int(base_iter / zoom_level))
    if max_iter_cap is not None:
        budget = min(budget, max_iter_cap)
    return budget
