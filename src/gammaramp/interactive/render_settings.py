# どこで: `src/gammaramp/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    window_size: tuple[int, int] = (640, 400)
    caption: str = "Gamma ramp"
    resizable: bool = True
    samples: int = 8
    srgb: bool = True
    background_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    layout: str = "classic"
    columns: int = 32
    redraw_interval: float = 0.05
