# どこで: `src/gammaramp/core/reference_ramp.py`。
# 何を: 参照ランプ（linear 光量が等間隔に増える列を sRGB で符号化したもの）の値と画像を生成する。
# なぜ: 同梱 PNG を外部の記事画像に頼らず、同じ規則で再生成できるようにするため。

from __future__ import annotations

import numpy as np
from PIL import Image

from gammaramp.core.color import linear_to_srgb
from gammaramp.core.ramp import DEFAULT_COLUMNS, validate_columns


def reference_ramp_values(columns: int = DEFAULT_COLUMNS) -> np.ndarray:
    """列 x の linear 光量 `x/(columns-1)` を sRGB 8bit へ符号化した値を返す。

    ガンマ補正が正しい環境で被覆率ランプが見えるべき値と一致する。
    """
    n = validate_columns(columns)
    linear = np.arange(n, dtype=np.float64) / float(n - 1)
    return np.floor(linear_to_srgb(linear) * 255.0 + 0.5).astype(np.uint8)


def reference_ramp_image(
    columns: int = DEFAULT_COLUMNS,
    *,
    box_width: int = 1,
    height: int = 1,
) -> Image.Image:
    """参照ランプをグレースケール（mode "L"）画像として返す。"""
    if int(box_width) <= 0 or int(height) <= 0:
        raise ValueError(
            f"box_width/height は正の値である必要がある: box_width={box_width!r}, height={height!r}"
        )
    row = np.repeat(reference_ramp_values(columns), int(box_width))
    arr = np.tile(row, (int(height), 1))
    return Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8))


__all__ = ["reference_ramp_image", "reference_ramp_values"]
