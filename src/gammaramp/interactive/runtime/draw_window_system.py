# どこで: `src/gammaramp/interactive/runtime/draw_window_system.py`。
# 何を: 現在のウィンドウサイズからランプの表示リストを組み立て、描画ウィンドウへ描くサブシステムを提供する。
# なぜ: `src/gammaramp/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging

from gammaramp.core.display_list import ImageBlit
from gammaramp.core.layout import FramePlan, build_frame, get_layout
from gammaramp.core.reference_image import ReferenceImage
from gammaramp.interactive.draw_window import create_draw_window
from gammaramp.interactive.gl.draw_renderer import DrawRenderer
from gammaramp.interactive.render_settings import RenderSettings

_logger = logging.getLogger(__name__)


class RampWindowSystem:
    """ランプ表示（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        *,
        settings: RenderSettings,
        reference: ReferenceImage,
    ) -> None:
        """描画用の window/renderer を初期化する。

        参照画像はセットアップ時にロード済みのものを受け取り、renderer へそのまま渡す。
        """

        self._settings = settings
        self._layout = get_layout(settings.layout)
        self._last_plan: FramePlan | None = None

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく renderer を作る。
        self.window = create_draw_window(settings)
        try:
            self._renderer = DrawRenderer(self.window, settings, reference)
        except Exception:
            self.window.close()
            raise

    @property
    def last_plan(self) -> FramePlan | None:
        """最後に描画したフレームの表示リスト。"""
        return self._last_plan

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()

        # --- 1) ビューポート更新 ---
        #
        # ランプの幾何はフレームバッファのピクセル単位で組むため、
        # 論理サイズではなくフレームバッファサイズを毎フレーム参照する。
        fb_w, fb_h = self._framebuffer_size()
        if fb_w <= 0 or fb_h <= 0:
            # 最小化中など。描くものが無い。
            return
        self._renderer.viewport(fb_w, fb_h)

        # --- 2) 背景クリア ---
        self._renderer.clear(self._settings.background_color)

        # --- 3) 表示リストの組み立て ---
        #
        # 箱の幅/高さはキャッシュせず、現在の幅から毎回計算し直す。
        plan = build_frame(fb_w, self._layout, columns=self._settings.columns)
        self._last_plan = plan

        # --- 4) 描画（行順、左から右） ---
        for command in plan.commands:
            if isinstance(command, ImageBlit):
                self._renderer.render_image(command.rect)
            else:
                self._renderer.render_fill(command)

        _logger.debug(
            "frame %dx%d: box=%.3fx%.0f rows=%d commands=%d",
            fb_w,
            fb_h,
            plan.box.width,
            plan.box.height,
            len(plan.rows),
            len(plan.commands),
        )

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        # renderer が保持している GPU リソースを破棄してから window を閉じる。
        try:
            self._renderer.release()
        except Exception:
            _logger.exception("Failed to release renderer resources")
        finally:
            self.window.close()
