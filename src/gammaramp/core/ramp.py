# どこで: `src/gammaramp/core/ramp.py`。
# 何を: グレーランプの幾何（箱の幅/高さ・列の境界）とグレー値/被覆率の計算、ランプ行の四角形生成を提供する。
# なぜ: 描画ツールキットに依存しない純粋計算として切り出し、テストで性質を確認できるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from gammaramp.core.display_list import FillBatch, Rect

DEFAULT_COLUMNS = 32
GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0

BLACK = 0
WHITE = 255


@dataclass(frozen=True, slots=True)
class BoxGeometry:
    """1 列（箱）の寸法。フレームごとに再計算する。"""

    width: float
    height: float


def validate_columns(columns: int) -> int:
    """列数が 2 以上であることを確認して int で返す。"""
    n = int(columns)
    if n < 2:
        raise ValueError(f"columns は 2 以上である必要がある: got={columns!r}")
    return n


def box_geometry(
    viewport_width: float,
    *,
    columns: int = DEFAULT_COLUMNS,
    height_factor: float = 2.0,
) -> BoxGeometry:
    """ビューポート幅から箱の寸法を求める。

    幅は `viewport_width / columns`（丸めない）、高さは `ceil(幅 * height_factor)`。
    """
    n = validate_columns(columns)
    w = float(viewport_width)
    if w <= 0:
        raise ValueError(f"viewport_width は正の値である必要がある: got={viewport_width!r}")
    if float(height_factor) <= 0:
        raise ValueError(f"height_factor は正の値である必要がある: got={height_factor!r}")
    box_w = w / float(n)
    return BoxGeometry(width=box_w, height=float(math.ceil(box_w * float(height_factor))))


def column_edges(total_width: float, columns: int) -> np.ndarray:
    """列 x が `[edges[x], edges[x+1])` を占める境界配列（長さ columns+1）を返す。"""
    n = validate_columns(columns)
    w = float(total_width)
    edges = np.arange(n + 1, dtype=np.float64) * w / float(n)
    # 浮動小数の誤差で右端が W からずれないよう固定する。
    edges[-1] = w
    return edges


def gray_value(x: int, columns: int) -> int:
    """列 x のグレー値 `round(255 * x / (columns - 1))` を返す（0.5 は切り上げ）。"""
    n = validate_columns(columns)
    xi = int(x)
    if not 0 <= xi < n:
        raise ValueError(f"x は [0, {n}) の範囲である必要がある: got={x!r}")
    return int(math.floor(xi * 255.0 / float(n - 1) + 0.5))


def gray_values(columns: int) -> np.ndarray:
    """全列のグレー値を uint8 配列で返す。"""
    n = validate_columns(columns)
    x = np.arange(n, dtype=np.float64)
    return np.floor(x * 255.0 / float(n - 1) + 0.5).astype(np.uint8)


def coverage_fraction(x: int, columns: int, *, inverted: bool = False) -> float:
    """列 x で 1 ピクセル行のうち線が覆う割合を返す。

    通常は `1 - x/(columns-1)`（黒線、左端 1 → 右端 0）。
    inverted=True では `x/(columns-1)`（白線、左端 0 → 右端 1）。
    """
    n = validate_columns(columns)
    xi = int(x)
    if not 0 <= xi < n:
        raise ValueError(f"x は [0, {n}) の範囲である必要がある: got={x!r}")
    t = xi / float(n - 1)
    return float(t if inverted else 1.0 - t)


def coverage_fractions(columns: int, *, inverted: bool = False) -> np.ndarray:
    """全列の被覆率を float64 配列で返す。"""
    n = validate_columns(columns)
    t = np.arange(n, dtype=np.float64) / float(n - 1)
    return t if inverted else 1.0 - t


def _quads_from_bounds(
    left: np.ndarray,
    top: np.ndarray,
    right: np.ndarray,
    bottom: np.ndarray,
) -> np.ndarray:
    quads = np.empty((left.shape[0], 4, 2), dtype=np.float32)
    quads[:, 0, 0] = left
    quads[:, 0, 1] = top
    quads[:, 1, 0] = right
    quads[:, 1, 1] = top
    quads[:, 2, 0] = right
    quads[:, 2, 1] = bottom
    quads[:, 3, 0] = left
    quads[:, 3, 1] = bottom
    return quads


def flat_ramp(rect: Rect, *, columns: int = DEFAULT_COLUMNS) -> FillBatch:
    """列ごとに一様なグレーで塗った箱を並べたランプを返す。"""
    n = validate_columns(columns)
    edges = column_edges(rect.width, n) + float(rect.x)
    top = np.full((n,), float(rect.y))
    bottom = np.full((n,), float(rect.bottom))
    quads = _quads_from_bounds(edges[:-1], top, edges[1:], bottom)
    return FillBatch(quads=quads, gray=gray_values(n))


def coverage_ramp(
    rect: Rect,
    *,
    columns: int = DEFAULT_COLUMNS,
    inverted: bool = False,
) -> list[FillBatch]:
    """1 ピクセル未満の太さの線を積み重ねて、被覆率でグレーを表すランプを返す。

    Notes
    -----
    - 行内の整数ピクセル行 y ごと・列 x ごとに、高さ `f(x)` の四角形を 1 つ置く。
    - 通常は白背景に黒線。inverted=True では行全体を黒で塗ってから白線を置く。
    - 高さ 0 の四角形は出力しない。
    - 中間調はアンチエイリアスの混色に任せる（ここでは計算しない）。
    """
    n = validate_columns(columns)
    out: list[FillBatch] = []
    if inverted:
        out.append(FillBatch.rect(rect, BLACK))

    edges = column_edges(rect.width, n) + float(rect.x)
    fractions = coverage_fractions(n, inverted=inverted)
    visible = np.nonzero(fractions > 0.0)[0]
    pixel_rows = int(math.ceil(float(rect.height)))
    if visible.size == 0 or pixel_rows <= 0:
        return out

    # (pixel_rows, visible) の格子を作って一括で四角形化する。
    ys = float(rect.y) + np.arange(pixel_rows, dtype=np.float64)
    yy, xx = np.meshgrid(ys, visible, indexing="ij")
    yy = yy.ravel()
    xx = xx.ravel()
    quads = _quads_from_bounds(edges[xx], yy, edges[xx + 1], yy + fractions[xx])
    gray = np.full((quads.shape[0],), WHITE if inverted else BLACK, dtype=np.uint8)
    out.append(FillBatch(quads=quads, gray=gray))
    return out


__all__ = [
    "BLACK",
    "BoxGeometry",
    "DEFAULT_COLUMNS",
    "GOLDEN_RATIO",
    "WHITE",
    "box_geometry",
    "column_edges",
    "coverage_fraction",
    "coverage_fractions",
    "coverage_ramp",
    "flat_ramp",
    "gray_value",
    "gray_values",
    "validate_columns",
]
