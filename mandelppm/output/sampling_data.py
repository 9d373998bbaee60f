from __future__ import annotations

import os
from typing import Dict

import numpy as np

from mandelppm.sampling.mitchell import filter_weight, mitchell
from mandelppm.sampling.samples import halton_offset
from mandelppm.util.logging_setup import get_logger


def _write_columns(path: str, header: str, rows) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"# {header}\n")
        for row in rows:
            f.write(" ".join(f"{v:.6g}" for v in row))
            f.write("\n")


def write_sampling_data(directory: str, *, count: int = 1024, filter_radius: float = 2.0) -> Dict[str, str]:
    """
    Export the sample pattern and filter for plotting.

    halton23.dat holds the recentered offsets, mitchell_1d.dat the 1D kernel
    across the footprint, mitchell_2d.dat each offset with its 2D weight.
    """
    logger = get_logger()
    os.makedirs(directory, exist_ok=True)
    support = filter_radius / 2.0

    offsets = [halton_offset(i, filter_radius) for i in range(count)]
    xs = np.arange(-filter_radius, filter_radius + 1e-9, 0.01)

    paths = {
        "halton23": os.path.join(directory, "halton23.dat"),
        "mitchell_1d": os.path.join(directory, "mitchell_1d.dat"),
        "mitchell_2d": os.path.join(directory, "mitchell_2d.dat"),
    }
    _write_columns(paths["halton23"], "X Y", offsets)
    _write_columns(paths["mitchell_1d"], "X Y", ((x, mitchell(x / filter_radius)) for x in xs))
    _write_columns(paths["mitchell_2d"], "X Y Z", ((dx, dy, filter_weight(dx, dy, support)) for dx, dy in offsets))

    logger.info("Wrote sampling data count=%s radius=%s -> %s", count, filter_radius, directory)
    return paths
