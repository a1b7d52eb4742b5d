# どこで: `src/gammaramp/interactive/gl/draw_renderer.py`。
# 何を: ランプ表示用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送・参照画像テクスチャを描画ループから分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
import numpy as np
from pyglet.window import Window

from gammaramp.core.color import gray_to_rgb01
from gammaramp.core.display_list import FillBatch, Rect
from gammaramp.core.reference_image import ReferenceImage, image_quad
from gammaramp.interactive.gl import utils as render_utils
from gammaramp.interactive.gl.framebuffer import (
    default_framebuffer_color_encoding,
    srgb_output_enabled,
)
from gammaramp.interactive.gl.index_buffer import build_quad_indices
from gammaramp.interactive.gl.quad_mesh import QuadMesh
from gammaramp.interactive.gl.shader import Shader
from gammaramp.interactive.render_settings import RenderSettings

GL_FRAMEBUFFER_SRGB = 0x8DB9
GL_SRGB8_ALPHA8 = 0x8C43

# 参照画像の四隅に対応するテクスチャ座標（先頭行が画像の上端）。
_IMAGE_UV = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]], dtype=np.float32)


class DrawRenderer:
    """塗りつぶし四角形と参照画像を描くシンプルなレンダラー。"""

    def __init__(
        self,
        window: Window,
        settings: RenderSettings,
        reference: ReferenceImage,
    ) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        # back buffer が sRGB でない環境では GL_FRAMEBUFFER_SRGB が効かないため、変換なしで書く。
        self._srgb = False
        if settings.srgb:
            self._srgb = srgb_output_enabled(True, default_framebuffer_color_encoding())

        self.fill_program = Shader.create_fill_shader(self.ctx)
        self.image_program = Shader.create_image_shader(self.ctx)
        self._fill_mesh = QuadMesh(
            self.ctx,
            self.fill_program,
            vertex_format="2f 3f",
            attributes=("in_vert", "in_color"),
        )
        self._image_mesh = QuadMesh(
            self.ctx,
            self.image_program,
            vertex_format="2f 2f",
            attributes=("in_vert", "in_uv"),
            initial_reserve=4096,
        )

        # 参照画像は 1 度だけ GPU へ送る。sRGB 時は sRGB テクスチャとして linear で取り出させる。
        self._reference_size = reference.size
        self._texture = self.ctx.texture(
            reference.size,
            4,
            reference.pixels.tobytes(),
            internal_format=GL_SRGB8_ALPHA8 if self._srgb else None,
        )
        # 箱の境界をぼかさないよう最近傍で拡大する。
        self._texture.filter = (moderngl.NEAREST, moderngl.NEAREST)
        self._texture.repeat_x = False
        self._texture.repeat_y = False

        if self._srgb:
            self.ctx.enable_direct(GL_FRAMEBUFFER_SRGB)

    def viewport(self, width: int, height: int) -> None:
        """ビューポートと射影行列をフレームバッファサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))
        projection = render_utils.build_projection(float(width), float(height))
        blob = projection.tobytes()
        self.fill_program["projection"].write(blob)
        self.image_program["projection"].write(blob)

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render_fill(self, batch: FillBatch) -> None:
        """FillBatch の四角形を単色で描く。"""
        n = len(batch)
        if n == 0:
            return
        colors = gray_to_rgb01(batch.gray, srgb_framebuffer=self._srgb)
        vertices = np.empty((n * 4, 5), dtype=np.float32)
        vertices[:, 0:2] = batch.quads.reshape(-1, 2)
        vertices[:, 2:5] = np.repeat(colors, 4, axis=0)
        self._fill_mesh.upload(vertices=vertices, indices=build_quad_indices(n))
        self._fill_mesh.render(moderngl.TRIANGLES)

    def render_image(self, rect: Rect) -> None:
        """参照画像を `rect` にちょうど収まるよう拡縮して描く。"""
        quad = image_quad(self._reference_size, rect)
        vertices = np.empty((4, 4), dtype=np.float32)
        vertices[:, 0:2] = quad
        vertices[:, 2:4] = _IMAGE_UV
        self._image_mesh.upload(vertices=vertices, indices=build_quad_indices(1))
        self._texture.use(location=0)
        self._image_mesh.render(moderngl.TRIANGLES)

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._fill_mesh.release()
        self._image_mesh.release()
        self._texture.release()
        self.fill_program.release()
        self.image_program.release()
        self.ctx.release()
