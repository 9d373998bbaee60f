from __future__ import annotations

ONE_THIRD = 1.0 / 3.0


def mitchell(x: float, b: float = ONE_THIRD, c: float = ONE_THIRD) -> float:
    """
    Mitchell-Netravali cubic at normalised distance x.

    The kernel is evaluated at s = |2x| and is zero for s >= 2, so x in
    [-1, 1] covers its whole support. Negative lobes sit at 1 < s < 2.
    """
    s = abs(2.0 * x)

    if s < 1.0:
        return (1.0 / 6.0) * (
            (12.0 - 9.0 * b - 6.0 * c) * s * s * s
            + (-18.0 + 12.0 * b + 6.0 * c) * s * s
            + (6.0 - 2.0 * b)
        )
    if s < 2.0:
        return (1.0 / 6.0) * (
            (-b - 6.0 * c) * s * s * s
            + (6.0 * b + 30.0 * c) * s * s
            + (-12.0 * b - 48.0 * c) * s
            + (8.0 * b + 24.0 * c)
        )
    return 0.0


def filter_weight(dx: float, dy: float, support_size: float) -> float:
    # Separable: product of the 1D kernel along each axis.
    inv = 1.0 / support_size
    return mitchell(dx * inv) * mitchell(dy * inv)
