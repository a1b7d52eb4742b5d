# どこで: `src/gammaramp/core/layout.py`。
# 何を: ランプ行の並び（レイアウト）を定義し、現在のビューポート幅から 1 フレーム分の描画命令列を組み立てる。
# なぜ: 「毎フレーム、現在のサイズから表示リストを作り直す」処理を GL から独立させ、テスト可能にするため。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gammaramp.core.display_list import DrawCommand, ImageBlit, Rect
from gammaramp.core.ramp import (
    DEFAULT_COLUMNS,
    GOLDEN_RATIO,
    BoxGeometry,
    box_geometry,
    coverage_ramp,
    flat_ramp,
)
from gammaramp.core.slant import slanted_stripes


class RowKind(Enum):
    """1 行分のランプ種別。"""

    REFERENCE = "reference"
    COVERAGE = "coverage"
    FLAT = "flat"
    INVERTED = "inverted"
    COVERAGE_PAIR = "coverage_pair"
    SLANT = "slant"


@dataclass(frozen=True, slots=True)
class RampLayout:
    """上から順に描く行の並びと、箱の高さ係数。"""

    name: str
    rows: tuple[RowKind, ...]
    height_factor: float = 2.0


@dataclass(frozen=True, slots=True)
class RowPlacement:
    """フレーム内で確定した行の種別と矩形。"""

    kind: RowKind
    rect: Rect


@dataclass(frozen=True, slots=True)
class FramePlan:
    """1 フレーム分の幾何と描画命令列（描画順）。"""

    box: BoxGeometry
    rows: tuple[RowPlacement, ...]
    commands: tuple[DrawCommand, ...]

    @property
    def height(self) -> float:
        """全行を積んだ高さを返す。"""
        if not self.rows:
            return 0.0
        return float(self.rows[-1].rect.bottom)


_LAYOUTS: dict[str, RampLayout] = {
    layout.name: layout
    for layout in (
        RampLayout(
            name="classic",
            rows=(RowKind.REFERENCE, RowKind.COVERAGE, RowKind.FLAT, RowKind.REFERENCE),
        ),
        RampLayout(
            name="inverted",
            rows=(
                RowKind.REFERENCE,
                RowKind.COVERAGE,
                RowKind.FLAT,
                RowKind.INVERTED,
                RowKind.REFERENCE,
            ),
        ),
        RampLayout(
            name="extended",
            rows=(
                RowKind.REFERENCE,
                RowKind.COVERAGE_PAIR,
                RowKind.FLAT,
                RowKind.INVERTED,
                RowKind.REFERENCE,
            ),
            height_factor=GOLDEN_RATIO,
        ),
        RampLayout(
            name="slanted",
            rows=(
                RowKind.REFERENCE,
                RowKind.COVERAGE,
                RowKind.FLAT,
                RowKind.REFERENCE,
                RowKind.SLANT,
            ),
        ),
    )
}

DEFAULT_LAYOUT = "classic"


def layout_names() -> tuple[str, ...]:
    """組み込みレイアウト名を返す。"""
    return tuple(_LAYOUTS)


def get_layout(name: str) -> RampLayout:
    """名前からレイアウトを引く。未知の名前は KeyError。"""
    key = str(name).strip().lower()
    try:
        return _LAYOUTS[key]
    except KeyError:
        raise KeyError(
            f"未知のレイアウトです: {name!r}（候補: {', '.join(layout_names())}）"
        ) from None


def _row_commands(kind: RowKind, rect: Rect, *, columns: int) -> list[DrawCommand]:
    if kind is RowKind.REFERENCE:
        return [ImageBlit(rect=rect)]
    if kind is RowKind.COVERAGE:
        return list(coverage_ramp(rect, columns=columns))
    if kind is RowKind.INVERTED:
        return list(coverage_ramp(rect, columns=columns, inverted=True))
    if kind is RowKind.FLAT:
        return [flat_ramp(rect, columns=columns)]
    if kind is RowKind.COVERAGE_PAIR:
        half = float(rect.width) / 2.0
        left = Rect(rect.x, rect.y, half, rect.height)
        right = Rect(float(rect.x) + half, rect.y, float(rect.width) - half, rect.height)
        return [
            *coverage_ramp(left, columns=columns),
            *coverage_ramp(right, columns=columns),
        ]
    if kind is RowKind.SLANT:
        return [slanted_stripes(rect)]
    raise ValueError(f"未対応の行種別: {kind!r}")


def build_frame(
    viewport_width: float,
    layout: RampLayout,
    *,
    columns: int = DEFAULT_COLUMNS,
    origin: tuple[float, float] = (0.0, 0.0),
) -> FramePlan:
    """現在のビューポート幅から 1 フレーム分の描画命令を組み立てる。

    Notes
    -----
    - 箱の寸法は毎回ここで計算し直す（フレーム間で保持しない）。
    - 行は layout.rows の順に上から積み、y オフセットは箱の高さずつ進む。
    """
    box = box_geometry(
        viewport_width,
        columns=columns,
        height_factor=layout.height_factor,
    )
    width = float(viewport_width)
    x0, y0 = float(origin[0]), float(origin[1])

    rows: list[RowPlacement] = []
    commands: list[DrawCommand] = []
    for i, kind in enumerate(layout.rows):
        rect = Rect(x0, y0 + float(i) * box.height, width, box.height)
        rows.append(RowPlacement(kind=kind, rect=rect))
        commands.extend(_row_commands(kind, rect, columns=columns))

    return FramePlan(box=box, rows=tuple(rows), commands=tuple(commands))


__all__ = [
    "DEFAULT_LAYOUT",
    "FramePlan",
    "RampLayout",
    "RowKind",
    "RowPlacement",
    "build_frame",
    "get_layout",
    "layout_names",
]
