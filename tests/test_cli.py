from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from cv_edges.__main__ import main
from cv_edges.io.image_io import read_gray, write_gray
from cv_edges.types import GrayImage


def _sample(tmp_path: Path) -> Path:
    values = np.zeros((24, 24), dtype=np.uint8)
    values[8:16, 8:16] = 210
    path = tmp_path / "sample.png"
    write_gray(GrayImage(values), path)
    return path


def test_cli_writes_edge_map(tmp_path: Path) -> None:
    out = tmp_path / "edges.png"
    code = main(["--input", str(_sample(tmp_path)), "--output", str(out), "--no-blur"])
    assert code == 0
    edges = read_gray(out)
    assert edges.shape == (24, 24)
    assert edges.intensity.max() > 0


def test_cli_saves_stage_figure(tmp_path: Path) -> None:
    out = tmp_path / "edges.png"
    figure = tmp_path / "figs" / "stages.png"
    code = main(
        ["--input", str(_sample(tmp_path)), "--output", str(out), "--figure", str(figure)]
    )
    assert code == 0
    assert figure.exists()


@pytest.mark.parametrize(
    "extra",
    [["--min", "1.5"], ["--max", "0"], ["--min", "0.7", "--max", "0.3"], ["--kernel-size", "4"]],
)
def test_cli_rejects_bad_parameters(tmp_path: Path, extra: list[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--input", str(_sample(tmp_path)), "--output", str(tmp_path / "o.png"), *extra])
    assert exc.value.code == 2
    assert not (tmp_path / "o.png").exists()


def test_cli_missing_input_returns_error(tmp_path: Path) -> None:
    code = main(["--input", str(tmp_path / "missing.png"), "--output", str(tmp_path / "o.png")])
    assert code == 1


def test_cli_unsupported_depth_returns_error(tmp_path: Path) -> None:
    source = tmp_path / "float.tiff"
    assert cv2.imwrite(str(source), np.zeros((4, 4), dtype=np.float32))
    out = tmp_path / "o.png"
    code = main(["--input", str(source), "--output", str(out)])
    assert code == 1
    assert not out.exists()


def test_cli_wrongly_typed_config_exits_with_usage_error(tmp_path: Path) -> None:
    config = tmp_path / "canny.yaml"
    config.write_text('kernel_size: "5"\n', encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(
            [
                "--input",
                str(_sample(tmp_path)),
                "--output",
                str(tmp_path / "o.png"),
                "--config",
                str(config),
            ]
        )
    assert exc.value.code == 2
    assert not (tmp_path / "o.png").exists()
