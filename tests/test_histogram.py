from __future__ import annotations

from pathlib import Path

import matplotlib.image as mpimg
import pytest

from charter.dataio.file_paths import histogram_path
from charter.tools.histogram import render_histogram


def test_render_histogram_writes_fixed_size_png(tmp_path: Path) -> None:
    target = render_histogram([3, -1, 7, 0, 0, 2, 0, 0, 0, 0, 5], tmp_path / "h.png", title="Record 0")
    image = mpimg.imread(target)
    assert image.shape[:2] == (600, 800)


def test_all_zero_record_still_renders(tmp_path: Path) -> None:
    target = render_histogram([0] * 11, tmp_path / "zero.png")
    assert target.stat().st_size > 0


def test_histogram_path_is_deterministic(tmp_path: Path) -> None:
    assert histogram_path(tmp_path, 42) == tmp_path / "histogram_000042.png"
    assert histogram_path(tmp_path, 7, "site A/3").name == "site_A_3_000007.png"


def test_histogram_path_rejects_negative_index(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        histogram_path(tmp_path, -1)
