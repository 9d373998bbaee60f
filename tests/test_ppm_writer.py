import io

import numpy as np

from mandelppm.config import RenderConfig, ViewWindow
from mandelppm.output.ppm_writer import quantize, save_png, to_image, write_ppm
from mandelppm.output.sampling_data import write_sampling_data
from mandelppm.pipeline import render_to_stream
from mandelppm.sampling.samples import SampleSet


def _config(**kw):
    params = dict(
        width=4,
        height=4,
        iterations=10,
        window=ViewWindow(x0=-2.0, x1=1.0, y0=-1.0, y1=1.0),
        sample_count=1,
        filter_radius=2.0,
    )
    params.update(kw)
    return RenderConfig(**params)


def test_quantize_gamma_and_clamp():
    buf = np.array([[-0.5, 0.0, 1.0], [2.0, 0.5, 0.25]])
    out = quantize(buf)
    assert out.dtype == np.uint8
    assert out[0].tolist() == [0, 0, 255]
    assert out[1].tolist() == [255, int(255 * 0.5 ** (1 / 2.2)), int(255 * 0.25 ** (1 / 2.2))]


def test_quantize_clamps_filter_ringing():
    out = quantize(np.array([[-1e-3, 1.0 + 1e-3, 0.0]]))
    assert out[0].tolist() == [0, 255, 0]


def test_write_ppm_layout():
    config = _config(width=3, height=2)
    buf = np.zeros((6, 3))
    buf[4] = 1.0
    stream = io.StringIO()
    write_ppm(config, buf, stream)
    assert stream.getvalue() == "P3 3 2 255\n0 0 0 0 0 0 0 0 0\n0 0 0 255 255 255 0 0 0\n"


def test_end_to_end_four_by_four():
    config = _config()
    stream = io.StringIO()
    render_to_stream(config, stream, sample_set=SampleSet.from_triples([(0.0, 0.0, 1.0)]))
    lines = stream.getvalue().splitlines()
    assert lines[0] == "P3 4 4 255"
    assert len(lines) == 5
    for row in lines[1:]:
        values = [int(v) for v in row.split(" ")]
        assert len(values) == 4 * 3
        assert all(0 <= v <= 255 for v in values)


def test_render_is_byte_identical_across_runs():
    config = _config(width=6, height=5, sample_count=16, iterations=32)
    a, b = io.StringIO(), io.StringIO()
    render_to_stream(config, a)
    render_to_stream(config, b)
    assert a.getvalue() == b.getvalue()


def test_png_preview(tmp_path):
    config = _config(width=5, height=3)
    buf = np.full((15, 3), 0.5)
    img = to_image(config, buf)
    assert img.size == (5, 3)
    assert img.mode == "RGB"
    path = save_png(config, buf, str(tmp_path / "preview.png"))
    assert (tmp_path / "preview.png").exists()
    assert path.endswith("preview.png")


def test_write_sampling_data(tmp_path):
    paths = write_sampling_data(str(tmp_path), count=16, filter_radius=2.0)
    halton_lines = open(paths["halton23"], encoding="utf-8").read().splitlines()
    assert halton_lines[0] == "# X Y"
    assert len(halton_lines) == 17
    assert halton_lines[1] == "-1 -1"
    m2d = open(paths["mitchell_2d"], encoding="utf-8").read().splitlines()
    assert m2d[0] == "# X Y Z"
    assert len(m2d[2].split()) == 3
    m1d = open(paths["mitchell_1d"], encoding="utf-8").read().splitlines()
    assert len(m1d) > 300
