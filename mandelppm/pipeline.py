from __future__ import annotations

from typing import Optional, TextIO

import numpy as np

from mandelppm.config import RenderConfig
from mandelppm.output.ppm_writer import save_png, write_ppm
from mandelppm.renderers.tiled import render_image
from mandelppm.sampling.samples import SampleSet
from mandelppm.shading import Shader


def render_to_stream(
    config: RenderConfig,
    stream: TextIO,
    *,
    sample_set: Optional[SampleSet] = None,
    shader: Optional[Shader] = None,
    png_path: Optional[str] = None,
    progress: bool = False,
) -> np.ndarray:
    """Render ``config`` and write it to ``stream`` as P3; returns the linear buffer."""
    buf = render_image(config, sample_set=sample_set, shader=shader, progress=progress)
    write_ppm(config, buf, stream)
    if png_path:
        save_png(config, buf, png_path)
    return buf
