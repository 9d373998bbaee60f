from __future__ import annotations

import numpy as np
from numba import njit

ESCAPE_RADIUS_SQUARED = 4.0


@njit(cache=False)
def escape(c_real, c_imag, budget):
    """
    Escape-time iteration of z <- z^2 + c for a single point.

    z starts at c (the first iterate of z = 0). The squared magnitude is tested at
    the top of every loop pass, so a point with |c| > 2 returns 0. A point that
    never escapes returns budget - 1, the index of the last pass, not the budget.
    """
    z_real = float(c_real)
    z_imag = float(c_imag)
    iteration = 0

    for i in range(budget):
        iteration = i

        z_real_sq = z_real * z_real
        z_imag_sq = z_imag * z_imag
        if z_real_sq + z_imag_sq > ESCAPE_RADIUS_SQUARED:
            break

        new_real = z_real_sq - z_imag_sq
        new_imag = 2.0 * z_real * z_imag

        z_real = c_real + new_real
        z_imag = c_imag + new_imag

    return iteration


@njit(cache=False)
def escape_samples(c_real, c_imag, budget):
    out = np.empty(c_real.shape[0], dtype=np.int64)
    for k in range(c_real.shape[0]):
        out[k] = escape(c_real[k], c_imag[k], budget)
    return out
