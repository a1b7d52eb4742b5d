# どこで: `src/gammaramp/interactive/gl/framebuffer.py`。
# 何を: 既定フレームバッファ（back buffer）の色エンコーディングを問い合わせ、sRGB 出力を使えるか判定する。
# なぜ: pyglet の Config では sRGB 対応の visual を要求できず、GL_FRAMEBUFFER_SRGB が効くかは実行環境次第のため。

from __future__ import annotations

import ctypes
import logging

_logger = logging.getLogger(__name__)

GL_FRAMEBUFFER = 0x8D40
GL_BACK_LEFT = 0x0402
GL_FRAMEBUFFER_ATTACHMENT_COLOR_ENCODING = 0x8210
GL_LINEAR = 0x2601
GL_SRGB = 0x8C40


def default_framebuffer_color_encoding() -> int:
    """現在のコンテキストの back buffer の色エンコーディング（GL_SRGB / GL_LINEAR）を返す。

    呼び出し前に対象ウィンドウのコンテキストが current で、既定フレームバッファが bind 済みである前提。
    """
    # GL 関数の解決はコンテキスト生成後に行う。
    from pyglet import gl

    value = gl.GLint(0)
    gl.glGetFramebufferAttachmentParameteriv(
        GL_FRAMEBUFFER,
        GL_BACK_LEFT,
        GL_FRAMEBUFFER_ATTACHMENT_COLOR_ENCODING,
        ctypes.byref(value),
    )
    return int(value.value)


def srgb_output_enabled(requested: bool, encoding: int) -> bool:
    """sRGB 出力を有効にするかを決める。

    Parameters
    ----------
    requested : bool
        設定 `render.srgb` の値。
    encoding : int
        `default_framebuffer_color_encoding()` の戻り値。

    Returns
    -------
    bool
        要求されていて、かつ back buffer が sRGB エンコーディングの場合だけ True。
        要求されているのに linear の場合は warning を出して False を返す。
    """
    if not requested:
        return False
    if int(encoding) == GL_SRGB:
        return True
    _logger.warning(
        "Default framebuffer is not sRGB-encoded (encoding=0x%04X); "
        "falling back to srgb=False so gray values are written unconverted",
        int(encoding),
    )
    return False


__all__ = [
    "GL_LINEAR",
    "GL_SRGB",
    "default_framebuffer_color_encoding",
    "srgb_output_enabled",
]
