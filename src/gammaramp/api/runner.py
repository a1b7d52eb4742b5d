"""
どこで: `src/gammaramp/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL を使い、グレーランプをウィンドウへ描画し続けるランナーを提供する。
なぜ: `python -m gammaramp` / `main.py` から、ガンマ補正とアンチエイリアスの目視確認を起動できる経路を用意するため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from gammaramp.core.layout import get_layout
from gammaramp.core.reference_image import load_reference_image
from gammaramp.core.runtime_config import runtime_config, set_config_path
from gammaramp.interactive.render_settings import RenderSettings
from gammaramp.interactive.runtime.draw_window_system import RampWindowSystem
from gammaramp.interactive.runtime.window_loop import FrameLoop, WindowTask

_logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str | Path | None = None,
    layout: str | None = None,
) -> None:
    """ウィンドウを生成し、閉じられるまでグレーランプを描画する。

    Parameters
    ----------
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    layout : str | None
        行の並び（`classic` / `inverted` / `extended` / `slanted`）。None の場合は設定値。

    Raises
    ------
    ReferenceImageError
        参照画像を読み込めない場合（ウィンドウ作成前に失敗する）。
    Exception
        描画中に発生した例外（ウィンドウ破棄後に送出する）。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    # 未知のレイアウトはウィンドウを開く前に弾く。
    layout_name = get_layout(cfg.layout if layout is None else str(layout)).name

    # 参照画像はここで 1 度だけロードし、以後は描画側へ参照で渡す。
    reference = load_reference_image(cfg.reference_path)
    _logger.info("Loaded reference ramp %s (%dx%d)", reference.source, *reference.size)

    settings = RenderSettings(
        window_size=cfg.window_size,
        caption=cfg.window_caption,
        samples=cfg.samples,
        srgb=cfg.srgb,
        layout=layout_name,
        columns=cfg.columns,
        redraw_interval=cfg.redraw_interval,
    )

    # --- サブシステムの組み立て ---
    ramp_window = RampWindowSystem(settings=settings, reference=reference)
    if cfg.window_position is not None:
        ramp_window.window.set_location(*cfg.window_position)

    # --- ループの実行 ---
    loop = FrameLoop(
        WindowTask(window=ramp_window.window, draw_frame=ramp_window.draw_frame),
        redraw_interval=settings.redraw_interval,
    )
    try:
        error = loop.run()
    finally:
        # 例外でも確実に後始末する。
        ramp_window.close()

    _logger.info("Window closed after %d frame(s)", loop.frame_count)
    if error is not None:
        raise error
