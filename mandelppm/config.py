from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from mandelppm.shading import SHADERS

DEFAULTS: Dict[str, Any] = {
    "width": 640,
    "height": 480,
    "iterations": 256,
    "window": [-2.0, 1.0, -1.0, 1.0],
    "sample_count": 64,
    "filter_radius": 2.0,
    "tile_width": 8,
    "tile_height": 8,
    "shader": "grayscale",
}


@dataclass(frozen=True)
class ViewWindow:
    """Rectangle of the complex plane mapped onto the image."""

    x0: float
    x1: float
    y0: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass(frozen=True)
class RenderConfig:
    """Everything a render needs. Constant for the duration of a render."""

    width: int
    height: int
    iterations: int
    window: ViewWindow
    sample_count: int
    filter_radius: float
    tile_width: int = 8
    tile_height: int = 8
    shader: str = "grayscale"

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def as_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        w = self.window
        out["window"] = [w.x0, w.x1, w.y0, w.y1]
        return out


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if config_path:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("Config JSON must be an object.")
        return cfg
    return dict(DEFAULTS)


def _positive_int(cfg: Dict[str, Any], key: str) -> int:
    try:
        value = int(cfg[key])
    except (TypeError, ValueError) as e:
        raise ValueError(f"{key} must be an integer, got {cfg[key]!r}") from e
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(DEFAULTS)
    out.update({k: v for k, v in cfg.items() if v is not None})

    for key in ("width", "height", "iterations", "sample_count", "tile_width", "tile_height"):
        out[key] = _positive_int(out, key)

    try:
        radius = float(out["filter_radius"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"filter_radius must be a number, got {out['filter_radius']!r}") from e
    if not radius > 0.0:
        raise ValueError(f"filter_radius must be positive, got {radius}")
    out["filter_radius"] = radius

    window = out["window"]
    if not (isinstance(window, (list, tuple)) and len(window) == 4):
        raise ValueError("window must be [x0, x1, y0, y1].")
    x0, x1, y0, y1 = (float(v) for v in window)
    if not (x1 > x0 and y1 > y0):
        raise ValueError(f"window must satisfy x1 > x0 and y1 > y0, got {[x0, x1, y0, y1]}")
    out["window"] = [x0, x1, y0, y1]

    shader = str(out["shader"])
    if shader not in SHADERS:
        raise ValueError(f"shader must be one of: {', '.join(sorted(SHADERS))}")
    out["shader"] = shader
    return out


def build_render_config(cfg: Dict[str, Any]) -> RenderConfig:
    x0, x1, y0, y1 = cfg["window"]
    return RenderConfig(
        width=cfg["width"],
        height=cfg["height"],
        iterations=cfg["iterations"],
        window=ViewWindow(x0=x0, x1=x1, y0=y0, y1=y1),
        sample_count=cfg["sample_count"],
        filter_radius=cfg["filter_radius"],
        tile_width=cfg["tile_width"],
        tile_height=cfg["tile_height"],
        shader=cfg["shader"],
    )
