# どこで: `src/gammaramp/interactive/draw_window.py`。
# 何を: ランプ表示用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

import logging

import pyglet
from pyglet.gl import Config
from pyglet.window import NoSuchConfigException, Window

from gammaramp.interactive.render_settings import RenderSettings

_logger = logging.getLogger(__name__)


def _window_config(samples: int) -> Config:
    if samples > 0:
        # 1px 未満の線の被覆をブレンドさせるために MSAA を有効化
        return Config(double_buffer=True, sample_buffers=1, samples=int(samples))  # type: ignore[abstract]
    return Config(double_buffer=True)  # type: ignore[abstract]


def create_draw_window(settings: RenderSettings) -> Window:
    """設定に基づき描画ウィンドウを生成する。

    MSAA 付きの config が使えない環境では、MSAA 無しで作り直す。
    """
    width, height = settings.window_size
    kwargs = dict(
        width=int(width),
        height=int(height),
        resizable=bool(settings.resizable),
        caption=str(settings.caption),
    )
    try:
        return pyglet.window.Window(config=_window_config(settings.samples), **kwargs)  # type: ignore[abstract]
    except NoSuchConfigException:
        if settings.samples <= 0:
            raise
        _logger.warning(
            "MSAA (samples=%d) is not available; falling back to a window without multisampling",
            settings.samples,
        )
        return pyglet.window.Window(config=_window_config(0), **kwargs)  # type: ignore[abstract]
