import json

from mandelppm.cli import main


def test_render_to_file(tmp_path):
    out = tmp_path / "image.ppm"
    rc = main(["render", "--width", "4", "--height", "3", "--iterations", "10", "--samples", "4", "-o", str(out)])
    assert rc == 0
    lines = out.read_text(encoding="ascii").splitlines()
    assert lines[0] == "P3 4 3 255"
    assert len(lines) == 4


def test_render_to_stdout(capsys):
    rc = main(["render", "--width", "2", "--height", "2", "--iterations", "8", "--samples", "1", "--shader", "gradient"])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("P3 2 2 255\n")
    assert len(out.splitlines()) == 3


def test_render_with_config_png_and_manifest(tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"width": 3, "height": 3, "iterations": 12, "sample_count": 2}), encoding="utf-8")
    png = tmp_path / "preview.png"
    manifest = tmp_path / "run" / "run.json"
    rc = main([
        "--config", str(cfg), "render", "-o", str(tmp_path / "image.ppm"),
        "--png", str(png), "--manifest", str(manifest), "--tile-size", "2",
    ])
    assert rc == 0
    assert png.exists()
    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert data["config"]["width"] == 3
    assert data["config"]["tile_width"] == 2
    assert "numpy" in data["packages"]


def test_invalid_configuration_exits_with_status_two(tmp_path):
    assert main(["render", "--width", "0", "-o", str(tmp_path / "x.ppm")]) == 2
    assert main(["render", "--window", "1", "-2", "-1", "1", "-o", str(tmp_path / "x.ppm")]) == 2


def test_samples_command(tmp_path):
    rc = main(["samples", "--output-dir", str(tmp_path), "--count", "8"])
    assert rc == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == ["halton23.dat", "mitchell_1d.dat", "mitchell_2d.dat"]
