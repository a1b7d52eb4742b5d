from __future__ import annotations

import numpy as np
import pytest

from gammaramp.core.display_list import FillBatch, Rect


def test_rect_edges() -> None:
    rect = Rect(10.0, 20.0, 30.0, 40.0)
    assert rect.right == 40.0
    assert rect.bottom == 60.0


def test_fill_batch_rect_has_single_quad() -> None:
    batch = FillBatch.rect(Rect(1.0, 2.0, 3.0, 4.0), 128)
    assert len(batch) == 1
    assert batch.quads.dtype == np.float32
    assert batch.quads[0].tolist() == [[1.0, 2.0], [4.0, 2.0], [4.0, 6.0], [1.0, 6.0]]
    assert batch.gray.tolist() == [128]


def test_fill_batch_is_read_only() -> None:
    batch = FillBatch.rect(Rect(0.0, 0.0, 1.0, 1.0), 0)
    with pytest.raises(ValueError):
        batch.quads[0, 0, 0] = 5.0


def test_fill_batch_concat_keeps_order() -> None:
    a = FillBatch.rect(Rect(0.0, 0.0, 1.0, 1.0), 10)
    b = FillBatch.rect(Rect(5.0, 0.0, 1.0, 1.0), 20)
    merged = FillBatch.concat([a, b])
    assert len(merged) == 2
    assert merged.gray.tolist() == [10, 20]
    assert merged.quads[1, 0].tolist() == [5.0, 0.0]
    assert len(FillBatch.concat([])) == 0


def test_fill_batch_rejects_bad_shapes() -> None:
    with pytest.raises(ValueError):
        FillBatch(quads=np.zeros((2, 3, 2)), gray=np.zeros((2,)))
    with pytest.raises(ValueError):
        FillBatch(quads=np.zeros((2, 4, 2)), gray=np.zeros((3,)))
