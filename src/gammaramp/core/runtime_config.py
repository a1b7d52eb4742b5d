# どこで: `src/gammaramp/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: ウィンドウ寸法やレイアウト、sRGB/MSAA の切り替えをコード変更なしで試せるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from gammaramp.core.layout import get_layout


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """gammaramp の実行時設定。"""

    config_path: Path | None
    window_size: tuple[int, int]
    window_position: tuple[int, int] | None
    window_caption: str
    layout: str
    columns: int
    samples: int
    srgb: bool
    redraw_interval: float
    reference_path: Path | None
    log_level: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    p = Path(str(path)).expanduser()
    _EXPLICIT_CONFIG_PATH = p
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".gammaramp" / "config.yaml",
        home / ".config" / "gammaramp" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int] | None:
    if value is None:
        return None
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_int(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"{key} は true/false である必要があります: got={value!r}")


def _as_log_level(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(f"{key} は logging のレベル名である必要があります: got={value!r}")
    return level


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("gammaramp")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="gammaramp/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション（mapping）単位で 1 段だけマージする。"""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.gammaramp/config.yaml` / `~/.config/gammaramp/config.yaml`
    3) `run(..., config_path=...)` の `config_path`
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = _as_int(_require(payload.get("version"), key="version"), key="version")
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    window = _as_mapping(payload.get("window"), key="window")
    window_size = _require(_as_int_pair(window.get("size"), key="window.size"), key="window.size")
    if window_size[0] <= 0 or window_size[1] <= 0:
        raise ValueError(f"window.size は正の値である必要があります: got={window_size}")
    window_position = _as_int_pair(window.get("position"), key="window.position")
    window_caption = str(_require(window.get("caption"), key="window.caption"))

    render = _as_mapping(payload.get("render"), key="render")
    layout = str(_require(render.get("layout"), key="render.layout")).strip().lower()
    try:
        get_layout(layout)
    except KeyError as exc:
        raise RuntimeError(f"render.layout が不正です: {exc.args[0]}") from exc

    columns = _require(_as_int(render.get("columns"), key="render.columns"), key="render.columns")
    if columns < 2:
        raise ValueError(f"render.columns は 2 以上である必要があります: got={columns}")

    samples = _require(_as_int(render.get("samples"), key="render.samples"), key="render.samples")
    if samples < 0:
        raise ValueError(f"render.samples は 0 以上である必要があります: got={samples}")

    srgb = _require(_as_bool(render.get("srgb"), key="render.srgb"), key="render.srgb")

    redraw_interval = _require(
        _as_float(render.get("redraw_interval"), key="render.redraw_interval"),
        key="render.redraw_interval",
    )
    if redraw_interval <= 0:
        raise ValueError(
            f"render.redraw_interval は正の値である必要があります: got={redraw_interval}"
        )

    reference = _as_mapping(payload.get("reference"), key="reference")
    reference_path = _as_optional_path(reference.get("path"))

    logging_section = _as_mapping(payload.get("logging"), key="logging")
    log_level = _require(
        _as_log_level(logging_section.get("level"), key="logging.level"),
        key="logging.level",
    )

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        window_size=window_size,
        window_position=window_position,
        window_caption=window_caption,
        layout=layout,
        columns=int(columns),
        samples=int(samples),
        srgb=bool(srgb),
        redraw_interval=float(redraw_interval),
        reference_path=reference_path,
        log_level=int(log_level),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
