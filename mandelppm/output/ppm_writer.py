from __future__ import annotations

from typing import TextIO

import numpy as np
from PIL import Image

from mandelppm.config import RenderConfig
from mandelppm.util.logging_setup import get_logger

GAMMA = 2.2
MAX_VALUE = 255


def quantize(buf: np.ndarray) -> np.ndarray:
    """
    Gamma-encode linear colours and truncate to 8 bits.

    Filter ringing can leave channels slightly outside [0, 1]; they are clamped
    before the power so negative inputs never reach it.
    """
    linear = np.clip(np.asarray(buf, dtype=np.float64), 0.0, 1.0)
    encoded = np.power(linear, 1.0 / GAMMA) * MAX_VALUE
    return encoded.astype(np.uint8)


def write_ppm(config: RenderConfig, buf: np.ndarray, stream: TextIO) -> None:
    """Write ``buf`` as a plain-text P3 pixel map, one image row per line."""
    logger = get_logger()
    pixels = quantize(buf).reshape(config.height, config.width * 3)

    stream.write(f"P3 {config.width} {config.height} {MAX_VALUE}\n")
    for row in pixels:
        stream.write(" ".join(map(str, row.tolist())))
        stream.write("\n")
    logger.info("Wrote P3 image %sx%s", config.width, config.height)


def to_image(config: RenderConfig, buf: np.ndarray) -> Image.Image:
    pixels = quantize(buf).reshape(config.height, config.width, 3)
    return Image.fromarray(pixels)


def save_png(config: RenderConfig, buf: np.ndarray, path: str) -> str:
    img = to_image(config, buf)
    img.save(path, format="PNG", optimize=True)
    get_logger().info("Saved PNG preview -> %s", path)
    return path
