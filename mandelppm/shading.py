from __future__ import annotations

from typing import Callable, Dict

import numpy as np

# shader(iterations, budget, plane_x, plane_y, window) -> float array of shape (n, 3)
Shader = Callable[..., np.ndarray]

RAMP_LOW = np.array([0.039947171001526, 0.098689197541096, 0.320381548791812])
RAMP_HIGH = np.array([0.819963705323531, 0.827725794455035, 0.851251645184511])
RAMP_CUTOFF = 20


def shade_grayscale(iterations, budget, plane_x=None, plane_y=None, window=None) -> np.ndarray:
    """
    v = iterations / budget on all three channels. Points that ran to the last
    loop pass are forced to black so the set's interior does not render white.
    """
    it = np.asarray(iterations, dtype=np.float64)
    v = np.where(it < budget - 1, it / budget, 0.0)
    return np.repeat(v[:, None], 3, axis=1)


def shade_gradient(iterations, budget, plane_x, plane_y, window) -> np.ndarray:
    """
    Position-tinted gradient.

    The tint is (fx, fy, 1 - fx) where fx, fy are the sample's fractional
    position in the window. It is blended toward white by t, the number of loop
    passes over the budget. A sample whose truncated 8-bit channels all read 255
    is treated as interior and rendered black.

    Counting passes, (iterations + 1) / budget, instead of iterations / budget is
    deliberate: it puts non-escaping samples at t == 1 so the interior rule fires.
    """
    it = np.asarray(iterations, dtype=np.float64)
    fx = np.clip((np.asarray(plane_x) - window.x0) / window.width, 0.0, 1.0)
    fy = np.clip((np.asarray(plane_y) - window.y0) / window.height, 0.0, 1.0)
    base = np.stack([fx, fy, 1.0 - fx], axis=1)

    t = ((it + 1.0) / budget)[:, None]
    rgb = base * (1.0 - t) + t

    saturated = np.all((rgb * 255.0).astype(np.int64) >= 255, axis=1)
    rgb[saturated] = 0.0
    return rgb


def shade_ramp(iterations, budget, plane_x=None, plane_y=None, window=None) -> np.ndarray:
    """Navy-to-silver ramp; counts at or below the cutoff sit at the dark end."""
    it = np.asarray(iterations, dtype=np.float64)
    # Non-escaping samples report budget - 1, the top of the ramp.
    span = max(budget - 1 - (RAMP_CUTOFF + 1), 1)
    v = np.where(it <= RAMP_CUTOFF, 0.0, (it - (RAMP_CUTOFF + 1)) / span)
    return RAMP_LOW + v[:, None] * (RAMP_HIGH - RAMP_LOW)


SHADERS: Dict[str, Shader] = {
    "grayscale": shade_grayscale,
    "gradient": shade_gradient,
    "ramp": shade_ramp,
}


def get_shader(name: str) -> Shader:
    try:
        return SHADERS[name]
    except KeyError:
        raise ValueError(f"unknown shader {name!r}; choose one of: {', '.join(sorted(SHADERS))}") from None
