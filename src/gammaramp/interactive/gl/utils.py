from __future__ import annotations

# どこで: `src/gammaramp/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列生成）を提供する。
# なぜ: renderer のシェーダ間で共有し、座標系の定義を一箇所に集約するため。

import numpy as np


def build_projection(width: float, height: float) -> "np.ndarray":
    """ウィンドウピクセル（左上原点、y 下向き）を基準とする正射影行列（ModernGL 用の転置済み）を返す。"""
    if width <= 0 or height <= 0:
        raise ValueError(f"width/height は正の値である必要がある: got=({width}, {height})")
    proj = np.array(
        [
            [2 / width, 0, 0, -1],
            [0, -2 / height, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj
