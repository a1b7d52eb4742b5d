# どこで: `src/gammaramp/interactive/gl/index_buffer.py`。
# 何を: 四角形 N 個を GL_TRIANGLES で描くためのインデックス配列を生成する。
# なぜ: インデックス生成を純粋関数として切り出し、テストしやすくするため。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]

VERTICES_PER_QUAD = 4
INDICES_PER_QUAD = 6


def build_quad_indices(n_quads: int) -> np.ndarray:
    """四角形 n_quads 個分の三角形インデックス（uint32, 長さ 6*n_quads）を返す。

    Notes
    -----
    - 各四角形の頂点順は 左上, 右上, 右下, 左下。三角形は (0, 1, 2), (0, 2, 3)。
    - 結果は n_quads だけで決まるため LRU キャッシュし、読み取り専用で返す。
    """
    n = int(n_quads)
    if n < 0:
        raise ValueError(f"n_quads は 0 以上である必要がある: got={n_quads!r}")
    if n == 0:
        return np.zeros((0,), dtype=np.uint32)
    return _build_quad_indices_cached(n)


@lru_cache(maxsize=64)
def _build_quad_indices_cached(n_quads: int) -> np.ndarray:
    out = _build_quad_indices_numba(n_quads)
    out.setflags(write=False)
    return out


@njit(cache=True)  # type: ignore[misc]
def _build_quad_indices_numba(n_quads: int) -> np.ndarray:
    """GL_TRIANGLES 用の quad indices を生成する（Numba 版）。"""
    out = np.empty((n_quads * 6,), dtype=np.uint32)
    for i in range(n_quads):
        base = i * 4
        j = i * 6
        out[j] = base
        out[j + 1] = base + 1
        out[j + 2] = base + 2
        out[j + 3] = base
        out[j + 4] = base + 2
        out[j + 5] = base + 3
    return out
