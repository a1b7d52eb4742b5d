from __future__ import annotations

import numpy as np
import pytest

from gammaramp.core.color import srgb_to_linear
from gammaramp.core.reference_ramp import reference_ramp_image, reference_ramp_values


def test_reference_ramp_values_span_black_to_white() -> None:
    values = reference_ramp_values(32)
    assert values.dtype == np.uint8
    assert values.shape == (32,)
    assert int(values[0]) == 0
    assert int(values[-1]) == 255
    assert np.all(np.diff(values.astype(np.int32)) > 0)


def test_reference_ramp_is_linear_in_light() -> None:
    values = reference_ramp_values(32)
    linear = srgb_to_linear(values.astype(np.float64) / 255.0)
    expected = np.arange(32) / 31.0
    # 8bit 量子化の誤差内で linear 光量が等間隔になる。
    assert linear == pytest.approx(expected, abs=0.01)


def test_reference_ramp_image_repeats_boxes() -> None:
    image = reference_ramp_image(4, box_width=3, height=2)
    assert image.mode == "L"
    assert image.size == (12, 2)
    arr = np.asarray(image)
    values = reference_ramp_values(4)
    assert arr[1].tolist() == np.repeat(values, 3).tolist()


def test_reference_ramp_image_rejects_bad_size() -> None:
    with pytest.raises(ValueError):
        reference_ramp_image(32, box_width=0)
