import numpy as np
import pytest

from gammaramp.interactive.gl.index_buffer import INDICES_PER_QUAD, build_quad_indices


def test_build_quad_indices_empty():
    out = build_quad_indices(0)
    assert out.dtype == np.uint32
    assert out.shape == (0,)


def test_build_quad_indices_single_quad():
    assert build_quad_indices(1).tolist() == [0, 1, 2, 0, 2, 3]


def test_build_quad_indices_offsets_each_quad_by_four_vertices():
    out = build_quad_indices(3)
    assert out.dtype == np.uint32
    assert out.shape == (3 * INDICES_PER_QUAD,)
    assert out.tolist() == [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7, 8, 9, 10, 8, 10, 11]


def test_build_quad_indices_is_cached_and_read_only():
    a = build_quad_indices(17)
    b = build_quad_indices(17)
    assert a is b
    assert not a.flags.writeable
    with pytest.raises(ValueError):
        a[0] = 99


def test_build_quad_indices_rejects_negative():
    with pytest.raises(ValueError):
        build_quad_indices(-1)
