from __future__ import annotations

from typing import Iterator, Optional, Tuple

import numpy as np
from tqdm import tqdm

from mandelppm.config import RenderConfig
from mandelppm.kernels.escape import escape_samples
from mandelppm.sampling.samples import SampleSet, build_sample_set
from mandelppm.shading import Shader, get_shader
from mandelppm.util.logging_setup import get_logger


def new_buffer(config: RenderConfig) -> np.ndarray:
    return np.zeros((config.pixel_count, 3), dtype=np.float64)


def window_extent(config: RenderConfig) -> Tuple[float, float]:
    return config.window.width, config.window.height


def resolve_pixel(
    px: int,
    py: int,
    config: RenderConfig,
    sample_set: SampleSet,
    buf: np.ndarray,
    *,
    shader: Shader,
    extent: Optional[Tuple[float, float]] = None,
) -> Optional[np.ndarray]:
    """
    Filtered colour of one pixel, written to ``buf[py * width + px]``.

    Pixels outside the image (tile overhang) are skipped and return None.
    """
    if px >= config.width or py >= config.height:
        return None

    window = config.window
    window_width, window_height = extent if extent is not None else window_extent(config)

    center_x = px + 0.5
    center_y = py + 0.5

    # Map every sample of the pattern into the complex window at once.
    plane_x = (center_x + sample_set.offsets_x) / config.width * window_width + window.x0
    plane_y = (center_y + sample_set.offsets_y) / config.height * window_height + window.y0

    iterations = escape_samples(plane_x, plane_y, config.iterations)
    rgb = shader(iterations, config.iterations, plane_x, plane_y, window)

    accum = (rgb * sample_set.weights[:, None]).sum(axis=0)
    color = accum / sample_set.weight_sum

    buf[py * config.width + px] = color
    return color


def tile_grid(width: int, height: int, tile_width: int, tile_height: int) -> Tuple[int, int]:
    cols = width // tile_width + (1 if width % tile_width > 0 else 0)
    rows = height // tile_height + (1 if height % tile_height > 0 else 0)
    return cols, rows


def iter_tiles(config: RenderConfig) -> Iterator[Tuple[int, int]]:
    cols, rows = tile_grid(config.width, config.height, config.tile_width, config.tile_height)
    for j in range(rows):
        for i in range(cols):
            yield i, j


def render_tile(
    i: int,
    j: int,
    config: RenderConfig,
    sample_set: SampleSet,
    buf: np.ndarray,
    *,
    shader: Shader,
    extent: Tuple[float, float],
) -> int:
    """Drive every pixel of tile (i, j); returns how many pixels were written."""
    offset_x = i * config.tile_width
    offset_y = j * config.tile_height
    written = 0
    for ty in range(config.tile_height):
        y = offset_y + ty
        for tx in range(config.tile_width):
            x = offset_x + tx
            if resolve_pixel(x, y, config, sample_set, buf, shader=shader, extent=extent) is not None:
                written += 1
    return written


def render_image(
    config: RenderConfig,
    *,
    sample_set: Optional[SampleSet] = None,
    shader: Optional[Shader] = None,
    progress: bool = False,
) -> np.ndarray:
    logger = get_logger()

    if sample_set is None:
        sample_set = build_sample_set(config.sample_count, config.filter_radius)
    if shader is None:
        shader = get_shader(config.shader)

    extent = window_extent(config)
    buf = new_buffer(config)
    cols, rows = tile_grid(config.width, config.height, config.tile_width, config.tile_height)

    logger.info("Render start size=%sx%s iter=%s samples=%s radius=%s tiles=%sx%s shader=%s",
                config.width, config.height, config.iterations, len(sample_set),
                config.filter_radius, cols, rows, config.shader)

    written = 0
    tiles = tqdm(iter_tiles(config), total=cols * rows, unit="tile", disable=not progress)
    for i, j in tiles:
        written += render_tile(i, j, config, sample_set, buf, shader=shader, extent=extent)
        if i == cols - 1:
            logger.debug("Rendered tile row %s/%s", j + 1, rows)

    if written != config.pixel_count:
        raise RuntimeError(f"Rendered {written} pixels, expected {config.pixel_count}.")

    logger.info("Render done pixels=%s", written)
    buf.flags.writeable = False
    return buf
