"""core.ramp（箱の幾何 / グレー値 / 被覆率 / ランプ行）をテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from gammaramp.core.display_list import Rect
from gammaramp.core.ramp import (
    BLACK,
    GOLDEN_RATIO,
    WHITE,
    box_geometry,
    column_edges,
    coverage_fraction,
    coverage_fractions,
    coverage_ramp,
    flat_ramp,
    gray_value,
    gray_values,
)


def test_box_geometry_for_640px_and_32_columns() -> None:
    box = box_geometry(640, columns=32)
    assert box.width == 20.0
    assert box.height == 40.0


def test_box_geometry_rounds_height_up() -> None:
    box = box_geometry(650, columns=32)
    assert box.width == pytest.approx(20.3125)
    assert box.height == 41.0


def test_box_geometry_golden_ratio_factor() -> None:
    box = box_geometry(640, columns=32, height_factor=GOLDEN_RATIO)
    assert box.height == float(math.ceil(20.0 * GOLDEN_RATIO))
    assert box.height == 33.0


@pytest.mark.parametrize("width", [0, -1.0])
def test_box_geometry_rejects_non_positive_width(width: float) -> None:
    with pytest.raises(ValueError):
        box_geometry(width)


def test_box_geometry_rejects_single_column() -> None:
    with pytest.raises(ValueError):
        box_geometry(640, columns=1)


@pytest.mark.parametrize("width", [1.0, 7.0, 123.456, 640.0, 1001.0])
def test_column_edges_partition_the_width(width: float) -> None:
    edges = column_edges(width, 32)
    assert edges.shape == (33,)
    assert edges[0] == 0.0
    assert edges[-1] == width
    # 隣接列は境界を共有し、幅は全て正（隙間も重なりも無い）。
    assert np.all(np.diff(edges) > 0)
    assert float(np.sum(np.diff(edges))) == pytest.approx(width)


def test_gray_value_endpoints_and_midpoint() -> None:
    assert gray_value(0, 32) == 0
    assert gray_value(31, 32) == 255
    assert gray_value(15, 32) == 123


def test_gray_value_rounds_half_up() -> None:
    # 255 * 1 / 2 = 127.5 -> 128
    assert gray_value(1, 3) == 128


def test_gray_values_match_scalar_and_are_non_decreasing() -> None:
    values = gray_values(32)
    assert values.dtype == np.uint8
    assert values.tolist() == [gray_value(x, 32) for x in range(32)]
    assert np.all(np.diff(values.astype(np.int32)) >= 0)


@pytest.mark.parametrize("x", [-1, 32])
def test_gray_value_rejects_out_of_range_column(x: int) -> None:
    with pytest.raises(ValueError):
        gray_value(x, 32)


def test_gray_value_requires_two_columns() -> None:
    with pytest.raises(ValueError):
        gray_value(0, 1)


def test_coverage_fraction_reaches_both_extremes() -> None:
    assert coverage_fraction(0, 32) == 1.0
    assert coverage_fraction(31, 32) == 0.0
    assert coverage_fraction(0, 32, inverted=True) == 0.0
    assert coverage_fraction(31, 32, inverted=True) == 1.0


def test_coverage_fractions_are_monotonic() -> None:
    normal = coverage_fractions(32)
    inverted = coverage_fractions(32, inverted=True)
    assert np.all(np.diff(normal) < 0)
    assert np.all(np.diff(inverted) > 0)
    assert normal == pytest.approx(1.0 - inverted)
    assert normal[15] == pytest.approx(coverage_fraction(15, 32))


def test_flat_ramp_boxes() -> None:
    batch = flat_ramp(Rect(0.0, 80.0, 640.0, 40.0), columns=32)
    assert len(batch) == 32
    quad = batch.quads[15]
    assert quad.tolist() == [[300.0, 80.0], [320.0, 80.0], [320.0, 120.0], [300.0, 120.0]]
    assert int(batch.gray[15]) == 123
    assert int(batch.gray[0]) == 0
    assert int(batch.gray[-1]) == 255


def test_flat_ramp_columns_touch() -> None:
    batch = flat_ramp(Rect(5.0, 0.0, 123.0, 10.0), columns=32)
    right_edges = batch.quads[:-1, 1, 0]
    left_edges = batch.quads[1:, 0, 0]
    assert right_edges.tolist() == left_edges.tolist()
    assert batch.quads[0, 0, 0] == pytest.approx(5.0)
    assert batch.quads[-1, 1, 0] == pytest.approx(128.0)


def test_coverage_ramp_stacks_one_line_per_pixel_row() -> None:
    rect = Rect(0.0, 40.0, 640.0, 40.0)
    batches = coverage_ramp(rect, columns=32)
    assert len(batches) == 1
    lines = batches[0]

    # 最終列は被覆率 0 なので出力されない。
    assert len(lines) == 40 * 31
    assert set(lines.gray.tolist()) == {BLACK}

    heights = lines.quads[:, 2, 1] - lines.quads[:, 1, 1]
    assert np.all(heights > 0)
    assert np.all(heights <= 1.0)

    first = lines.quads[0]
    assert first[0].tolist() == [0.0, 40.0]
    assert first[2].tolist() == [20.0, 41.0]
    assert float(heights[1]) == pytest.approx(1.0 - 1.0 / 31.0, abs=1e-5)

    # 全ての線は行の矩形内に収まる。
    assert float(lines.quads[:, :, 1].min()) >= 40.0
    assert float(lines.quads[:, :, 1].max()) <= 80.0


def test_inverted_coverage_ramp_draws_white_over_black() -> None:
    rect = Rect(0.0, 0.0, 320.0, 10.0)
    background, lines = coverage_ramp(rect, columns=32, inverted=True)

    assert len(background) == 1
    assert int(background.gray[0]) == BLACK
    assert background.quads[0].tolist() == [[0.0, 0.0], [320.0, 0.0], [320.0, 10.0], [0.0, 10.0]]

    # 先頭列は被覆率 0 なので出力されない。
    assert len(lines) == 10 * 31
    assert set(lines.gray.tolist()) == {WHITE}
    assert float(lines.quads[0, 0, 0]) == 10.0
    heights = lines.quads[:, 2, 1] - lines.quads[:, 1, 1]
    assert float(heights[30]) == pytest.approx(1.0)
