# どこで: `src/gammaramp/core/color.py`。
# 何を: sRGB ⇔ linear の伝達関数と、8bit グレー値からシェーダ用 RGB への変換を提供する。
# なぜ: sRGB フレームバッファ使用時に「指定した 8bit 値がそのまま画面に出る」ことを保証するため。

from __future__ import annotations

import numpy as np


def srgb_to_linear(values: np.ndarray) -> np.ndarray:
    """sRGB 符号値（0..1）を linear 光量（0..1）へ変換する（IEC 61966-2-1）。"""
    v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    return np.where(v <= 0.04045, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(values: np.ndarray) -> np.ndarray:
    """linear 光量（0..1）を sRGB 符号値（0..1）へ変換する。"""
    v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    return np.where(v <= 0.0031308, v * 12.92, 1.055 * v ** (1.0 / 2.4) - 0.055)


def gray_to_rgb01(gray: np.ndarray, *, srgb_framebuffer: bool) -> np.ndarray:
    """8bit グレー値列を shape (N, 3) の float32 RGB へ変換する。

    sRGB フレームバッファでは出力時に再符号化されるため、ここで linear へ戻しておく。
    """
    g = np.asarray(gray, dtype=np.float64).reshape(-1) / 255.0
    if srgb_framebuffer:
        g = srgb_to_linear(g)
    return np.repeat(g[:, None], 3, axis=1).astype(np.float32)


__all__ = ["gray_to_rgb01", "linear_to_srgb", "srgb_to_linear"]
