from __future__ import annotations

from typing import Tuple


def halton(index: int, base: int) -> float:
    """Radical inverse of ``index`` in ``base``; lies in [0, 1)."""
    result = 0.0
    f = 1.0 / base
    i = index
    while i > 0:
        result += f * (i % base)
        i //= base
        f /= base
    return result


def halton23(index: int) -> Tuple[float, float]:
    return halton(index, 2), halton(index, 3)
