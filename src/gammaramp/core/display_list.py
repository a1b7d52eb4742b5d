# どこで: `src/gammaramp/core/display_list.py`。
# 何を: 1 フレーム分の描画命令（塗りつぶし四角形の束 / 参照画像の貼り付け）を表す型を定義する。
# なぜ: ランプ計算（core）と GL 描画（interactive）を疎結合にし、core をヘッドレスでテスト可能に保つため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True, slots=True)
class Rect:
    """ウィンドウピクセル座標（左上原点、y 下向き）の矩形。"""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return float(self.x + self.width)

    @property
    def bottom(self) -> float:
        return float(self.y + self.height)


@dataclass(frozen=True, slots=True)
class FillBatch:
    """単色で塗る四角形（凸四角形）の束。

    Notes
    -----
    - `quads` は shape (N, 4, 2) の float32。頂点順は左上 → 右上 → 右下 → 左下。
    - `gray` は shape (N,) の uint8。四角形ごとのグレー値（0=黒, 255=白）。
    - 描画順は配列順（後ろが手前）。
    """

    quads: np.ndarray
    gray: np.ndarray

    def __post_init__(self) -> None:
        quads = np.ascontiguousarray(self.quads, dtype=np.float32)
        gray = np.ascontiguousarray(self.gray, dtype=np.uint8)
        if quads.ndim != 3 or quads.shape[1:] != (4, 2):
            raise ValueError(f"quads は (N, 4, 2) である必要がある: got={quads.shape}")
        if gray.shape != (quads.shape[0],):
            raise ValueError(
                f"gray は (N,) である必要がある: quads={quads.shape}, gray={gray.shape}"
            )
        quads.setflags(write=False)
        gray.setflags(write=False)
        object.__setattr__(self, "quads", quads)
        object.__setattr__(self, "gray", gray)

    def __len__(self) -> int:
        return int(self.quads.shape[0])

    @classmethod
    def empty(cls) -> FillBatch:
        return cls(
            quads=np.zeros((0, 4, 2), dtype=np.float32),
            gray=np.zeros((0,), dtype=np.uint8),
        )

    @classmethod
    def rect(cls, rect: Rect, gray: int) -> FillBatch:
        """矩形 1 つを `gray` で塗る FillBatch を返す。"""
        quads = np.array(
            [
                [
                    [rect.x, rect.y],
                    [rect.right, rect.y],
                    [rect.right, rect.bottom],
                    [rect.x, rect.bottom],
                ]
            ],
            dtype=np.float32,
        )
        return cls(quads=quads, gray=np.array([int(gray)], dtype=np.uint8))

    @classmethod
    def concat(cls, batches: Sequence[FillBatch]) -> FillBatch:
        """複数の FillBatch を描画順を保って 1 つへ連結する。"""
        if not batches:
            return cls.empty()
        return cls(
            quads=np.concatenate([b.quads for b in batches], axis=0),
            gray=np.concatenate([b.gray for b in batches], axis=0),
        )


@dataclass(frozen=True, slots=True)
class ImageBlit:
    """参照画像を `rect` へちょうど収まるよう拡縮して描く命令。"""

    rect: Rect


DrawCommand = Union[FillBatch, ImageBlit]


__all__ = ["DrawCommand", "FillBatch", "ImageBlit", "Rect"]
