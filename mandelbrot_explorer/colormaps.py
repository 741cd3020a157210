"""
Color mapping for escape-time values.

Escaped points get a rainbow hue proportional to their escape count
(full saturation and brightness); points that never escaped are black.
colorize applies the same conversion to a whole array of escape counts with
numpy, so coloring costs memory per pixel, not per possible count.
"""

import math

import numpy as np


IN_SET_COLOR = (0, 0, 0)


def hsb_to_rgb(hue, saturation, brightness):
    """
    Convert a hue/saturation/brightness triple to 8-bit RGB.

    Standard hexagonal conversion: the hue wraps at 1.0 and is split into
    six 60 degree sectors with piecewise-linear channel ramps.

    Args:
        hue: Any float, only the fractional part is used
        saturation, brightness: Floats in [0, 1]

    Returns:
        (r, g, b) tuple of ints in [0, 255]
    """
    if saturation == 0:
        v = int(brightness * 255.0 + 0.5)
        return v, v, v

    h = (hue - math.floor(hue)) * 6.0
    f = h - math.floor(h)
    p = brightness * (1.0 - saturation)
    q = brightness * (1.0 - saturation * f)
    t = brightness * (1.0 - saturation * (1.0 - f))

    sector = int(h)
    if sector == 0:
        r, g, b = brightness, t, p
    elif sector == 1:
        r, g, b = q, brightness, p
    elif sector == 2:
        r, g, b = p, brightness, t
    elif sector == 3:
        r, g, b = p, q, brightness
    elif sector == 4:
        r, g, b = t, p, brightness
    else:
        r, g, b = brightness, p, q

    return int(r * 255.0 + 0.5), int(g * 255.0 + 0.5), int(b * 255.0 + 0.5)


def color_for(iteration, max_iter):
    """
    Color of a single escape count.

    Args:
        iteration: Escape count in [0, max_iter]
        max_iter: Iteration budget the count was computed with

    Returns:
        IN_SET_COLOR when iteration == max_iter, otherwise the fully
        saturated hue iteration / max_iter.
    """
    if iteration == max_iter:
        return IN_SET_COLOR
    return hsb_to_rgb(iteration / max_iter, 1.0, 1.0)


def hsb_to_rgb_array(hue, saturation, brightness):
    """
    Vectorized hsb_to_rgb over an array of hues.

    Uses the same float operations as hsb_to_rgb, so both give identical
    channels for the same hue.

    Returns:
        uint8 array of shape hue.shape + (3,)
    """
    hue = np.asarray(hue, dtype=np.float64)
    h = (hue - np.floor(hue)) * 6.0
    f = h - np.floor(h)
    p = np.full_like(h, brightness * (1.0 - saturation))
    q = brightness * (1.0 - saturation * f)
    t = brightness * (1.0 - saturation * (1.0 - f))
    v = np.full_like(h, brightness)

    sector = h.astype(np.int64)
    sectors = [sector == k for k in range(5)]
    r = np.select(sectors, [v, q, p, p, t], default=v)
    g = np.select(sectors, [t, v, v, q, p], default=p)
    b = np.select(sectors, [p, p, t, v, v], default=q)

    rgb = np.stack([r, g, b], axis=-1)
    return np.floor(rgb * 255.0 + 0.5).astype(np.uint8)


def colorize(iterations, max_iter):
    """
    Color an array of escape counts.

    Only the counts present in the array are converted, so the cost does
    not depend on how large max_iter is.

    Args:
        iterations: Integer array of escape counts in [0, max_iter]
        max_iter: Iteration budget the counts were computed with

    Returns:
        uint8 array of shape iterations.shape + (3,), with
        out[...] == color_for(iterations[...], max_iter)
    """
    rgb = hsb_to_rgb_array(iterations / max_iter, 1.0, 1.0)
    rgb[iterations == max_iter] = IN_SET_COLOR
    return rgb
