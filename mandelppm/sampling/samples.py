from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np

from mandelppm.sampling.halton import halton23
from mandelppm.sampling.mitchell import filter_weight


@dataclass(frozen=True)
class SampleSet:
    """
    Subpixel sample pattern shared by every pixel of a render.

    Offsets are relative to the pixel center, in pixels. The filter is space
    invariant, so weights are computed once here rather than per pixel.
    """

    offsets_x: np.ndarray
    offsets_y: np.ndarray
    weights: np.ndarray
    weight_sum: float

    def __post_init__(self) -> None:
        n = self.weights.shape[0]
        if self.offsets_x.shape != (n,) or self.offsets_y.shape != (n,):
            raise ValueError("offsets and weights must be 1D arrays of equal length")
        if n == 0:
            raise ValueError("a sample set needs at least one sample")
        if not self.weight_sum > 0.0:
            raise ValueError(f"sample weights must sum to a positive value, got {self.weight_sum}")
        for arr in (self.offsets_x, self.offsets_y, self.weights):
            arr.flags.writeable = False

    def __len__(self) -> int:
        return int(self.weights.shape[0])

    def __iter__(self) -> Iterator[Tuple[float, float, float]]:
        return zip(self.offsets_x.tolist(), self.offsets_y.tolist(), self.weights.tolist())

    @classmethod
    def from_triples(cls, triples: Iterable[Tuple[float, float, float]]) -> "SampleSet":
        rows = np.asarray(list(triples), dtype=np.float64).reshape(-1, 3)
        weights = rows[:, 2].copy()
        return cls(
            offsets_x=rows[:, 0].copy(),
            offsets_y=rows[:, 1].copy(),
            weights=weights,
            weight_sum=float(weights.sum()),
        )


def halton_offset(index: int, filter_radius: float) -> Tuple[float, float]:
    # Recenter [0, 1) onto [-0.5, 0.5) and scale to the filter footprint.
    hx, hy = halton23(index)
    return (hx - 0.5) * filter_radius, (hy - 0.5) * filter_radius


def build_sample_set(sample_count: int, filter_radius: float) -> SampleSet:
    """
    Halton (2, 3) offsets weighted by a Mitchell-Netravali filter.

    A single sample is placed at the pixel center with unit weight: Halton
    index 0 sits on the footprint corner where the filter is zero.
    """
    if sample_count <= 0:
        raise ValueError(f"sample_count must be positive, got {sample_count}")
    if not filter_radius > 0.0:
        raise ValueError(f"filter_radius must be positive, got {filter_radius}")

    if sample_count == 1:
        return SampleSet.from_triples([(0.0, 0.0, 1.0)])

    support = filter_radius / 2.0
    offsets_x = np.empty(sample_count, dtype=np.float64)
    offsets_y = np.empty(sample_count, dtype=np.float64)
    weights = np.empty(sample_count, dtype=np.float64)
    weight_sum = 0.0
    for i in range(sample_count):
        dx, dy = halton_offset(i, filter_radius)
        w = filter_weight(dx, dy, support)
        offsets_x[i] = dx
        offsets_y[i] = dy
        weights[i] = w
        weight_sum += w

    return SampleSet(offsets_x=offsets_x, offsets_y=offsets_y, weights=weights, weight_sum=weight_sum)
