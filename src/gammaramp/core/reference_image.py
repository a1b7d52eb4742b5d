"""
どこで: `src/gammaramp/core/reference_image.py`。
何を: 参照ランプ画像（PNG）の読み込みと、表示先矩形へのアフィン変換を提供する。
なぜ: 参照画像をセットアップ時に一度だけ読み込み、描画側へ明示的に渡す（隠れたグローバルキャッシュを持たない）ため。
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from gammaramp.core.display_list import Rect

BUNDLED_REFERENCE_NAME = "gamma-ramp32.png"


class ReferenceImageError(RuntimeError):
    """参照画像が見つからない / デコードできない場合の例外。"""


@dataclass(frozen=True, slots=True)
class ReferenceImage:
    """デコード済みの参照画像（不変）。

    Notes
    -----
    `pixels` は shape (H, W, 4) の uint8（RGBA, 先頭行が画像の上端）。読み取り専用。
    """

    pixels: np.ndarray
    source: str

    def __post_init__(self) -> None:
        pixels = np.ascontiguousarray(self.pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"pixels は (H, W, 4) である必要がある: got={pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise ValueError(f"空の画像は扱えない: got={pixels.shape}")
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) を返す。"""
        return int(self.pixels.shape[1]), int(self.pixels.shape[0])


def _read_bundled_bytes() -> bytes:
    return (
        resources.files("gammaramp")
        .joinpath("resource", BUNDLED_REFERENCE_NAME)
        .read_bytes()
    )


def decode_reference_image(blob: bytes, *, source: str) -> ReferenceImage:
    """PNG バイト列をデコードして ReferenceImage を返す。"""
    try:
        with Image.open(io.BytesIO(blob)) as im:
            im.load()
            rgba = im.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise ReferenceImageError(f"参照ランプのデコードに失敗しました: source={source}") from exc
    return ReferenceImage(pixels=np.asarray(rgba, dtype=np.uint8), source=source)


def load_reference_image(path: str | Path | None = None) -> ReferenceImage:
    """参照画像をロードする。

    Parameters
    ----------
    path : str | Path | None
        None の場合は同梱の `gammaramp/resource/gamma-ramp32.png` を使う。

    Raises
    ------
    ReferenceImageError
        ファイルが読めない、または PNG としてデコードできない場合。
    """
    if path is None:
        source = f"gammaramp/resource/{BUNDLED_REFERENCE_NAME}"
        try:
            blob = _read_bundled_bytes()
        except OSError as exc:
            raise ReferenceImageError(
                "同梱の参照ランプを読み込めません（package-data を確認してください）"
            ) from exc
        return decode_reference_image(blob, source=source)

    p = Path(path).expanduser()
    try:
        blob = p.read_bytes()
    except OSError as exc:
        raise ReferenceImageError(f"参照ランプを読み込めません: path={p}") from exc
    return decode_reference_image(blob, source=str(p))


def image_transform(image_size: tuple[int, int], rect: Rect) -> np.ndarray:
    """画像ピクセル座標を `rect` へ写す 2x3 アフィン行列（拡縮 → 平行移動）を返す。"""
    img_w, img_h = image_size
    if int(img_w) <= 0 or int(img_h) <= 0:
        raise ValueError(f"image_size は正の (width, height) である必要がある: got={image_size!r}")
    sx = float(rect.width) / float(img_w)
    sy = float(rect.height) / float(img_h)
    return np.array(
        [
            [sx, 0.0, float(rect.x)],
            [0.0, sy, float(rect.y)],
        ],
        dtype=np.float64,
    )


def image_quad(image_size: tuple[int, int], rect: Rect) -> np.ndarray:
    """画像の四隅（左上 → 右上 → 右下 → 左下）を変換した shape (4, 2) の座標を返す。"""
    img_w, img_h = image_size
    m = image_transform(image_size, rect)
    corners = np.array(
        [
            [0.0, 0.0, 1.0],
            [float(img_w), 0.0, 1.0],
            [float(img_w), float(img_h), 1.0],
            [0.0, float(img_h), 1.0],
        ],
        dtype=np.float64,
    )
    return corners @ m.T


__all__ = [
    "BUNDLED_REFERENCE_NAME",
    "ReferenceImage",
    "ReferenceImageError",
    "decode_reference_image",
    "image_quad",
    "image_transform",
    "load_reference_image",
]
