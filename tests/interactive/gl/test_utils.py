import numpy as np
import pytest

from gammaramp.interactive.gl.utils import build_projection


def _to_ndc(proj: np.ndarray, x: float, y: float) -> tuple[float, float]:
    # ModernGL へ渡すため転置済みなので、数式上の行列は proj.T。
    clip = proj.T @ np.array([x, y, 0.0, 1.0], dtype=np.float32)
    return float(clip[0] / clip[3]), float(clip[1] / clip[3])


def test_projection_maps_top_left_and_bottom_right():
    proj = build_projection(640, 400)
    assert proj.dtype == np.float32
    assert proj.shape == (4, 4)
    assert _to_ndc(proj, 0.0, 0.0) == pytest.approx((-1.0, 1.0))
    assert _to_ndc(proj, 640.0, 400.0) == pytest.approx((1.0, -1.0))
    assert _to_ndc(proj, 320.0, 200.0) == pytest.approx((0.0, 0.0), abs=1e-6)


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-5, 5)])
def test_projection_rejects_empty_viewport(size):
    with pytest.raises(ValueError):
        build_projection(*size)
