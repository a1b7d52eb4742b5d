# どこで: `src/gammaramp/core/slant.py`。
# 何を: 位置合わせの目安として置く、斜めストライプ（平行四辺形 5 本）の装飾パターンを生成する。
# なぜ: グレー値の意味を持たない装飾をランプ計算から分離しておくため。

from __future__ import annotations

import numpy as np

from gammaramp.core.display_list import FillBatch, Rect
from gammaramp.core.ramp import BLACK

STRIPE_COUNT = 5


def slanted_stripes(rect: Rect) -> FillBatch:
    """`rect` 内に黒い平行四辺形を STRIPE_COUNT 本並べる。

    1 本あたり周期 `rect.width / STRIPE_COUNT` の半分の幅を持ち、
    上辺を `min(rect.height, 周期/2)` だけ右へずらす。全頂点は `rect` 内に収まる。
    """
    if rect.width <= 0 or rect.height <= 0:
        return FillBatch.empty()

    period = float(rect.width) / float(STRIPE_COUNT)
    stripe_w = period / 2.0
    skew = min(float(rect.height), stripe_w)

    left = float(rect.x) + np.arange(STRIPE_COUNT, dtype=np.float64) * period
    top = float(rect.y)
    bottom = float(rect.bottom)

    quads = np.empty((STRIPE_COUNT, 4, 2), dtype=np.float32)
    quads[:, 0, 0] = left + skew
    quads[:, 0, 1] = top
    quads[:, 1, 0] = left + skew + stripe_w
    quads[:, 1, 1] = top
    quads[:, 2, 0] = left + stripe_w
    quads[:, 2, 1] = bottom
    quads[:, 3, 0] = left
    quads[:, 3, 1] = bottom
    return FillBatch(quads=quads, gray=np.full((STRIPE_COUNT,), BLACK, dtype=np.uint8))


__all__ = ["STRIPE_COUNT", "slanted_stripes"]
