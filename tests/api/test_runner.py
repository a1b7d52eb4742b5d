"""`gammaramp.api.runner.run` の配線（ロード順 / 後始末 / 例外の再送出）をテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from gammaramp.core.reference_image import ReferenceImageError
from gammaramp.core.runtime_config import set_config_path

try:
    from gammaramp.api import runner
except Exception as exc:  # pragma: no cover - GL スタックを読み込めない環境
    pytest.skip(f"pyglet/moderngl を import できない: {exc}", allow_module_level=True)


class _FakeWindow:
    def __init__(self) -> None:
        self.location: tuple[int, int] | None = None

    def set_location(self, x: int, y: int) -> None:
        self.location = (x, y)


class _FakeSystem:
    instances: list["_FakeSystem"] = []

    def __init__(self, *, settings, reference) -> None:
        self.settings = settings
        self.reference = reference
        self.window = _FakeWindow()
        self.closed = False
        _FakeSystem.instances.append(self)

    def draw_frame(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class _FakeLoop:
    result: Exception | None = None

    def __init__(self, task, *, redraw_interval: float) -> None:
        self.task = task
        self.redraw_interval = redraw_interval
        self.frame_count = 3

    def run(self) -> Exception | None:
        return _FakeLoop.result


@pytest.fixture(autouse=True)
def _fakes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    _FakeSystem.instances.clear()
    _FakeLoop.result = None
    monkeypatch.setattr(runner, "RampWindowSystem", _FakeSystem)
    monkeypatch.setattr(runner, "FrameLoop", _FakeLoop)
    yield
    set_config_path(None)


def test_run_wires_config_into_window_system(tmp_path: Path):
    explicit = tmp_path / "config.yaml"
    explicit.write_text(
        "window:\n  position: [10, 20]\nrender:\n  columns: 16\n  srgb: false\n",
        encoding="utf-8",
    )

    runner.run(config_path=explicit, layout="Inverted")

    (system,) = _FakeSystem.instances
    assert system.settings.layout == "inverted"
    assert system.settings.columns == 16
    assert system.settings.srgb is False
    assert system.reference.size == (32, 1)
    assert system.window.location == (10, 20)
    assert system.closed


def test_unknown_layout_fails_before_window_creation():
    with pytest.raises(KeyError):
        runner.run(layout="rainbow")
    assert _FakeSystem.instances == []


def test_missing_reference_fails_before_window_creation(tmp_path: Path):
    explicit = tmp_path / "config.yaml"
    explicit.write_text('reference:\n  path: "missing.png"\n', encoding="utf-8")

    with pytest.raises(ReferenceImageError):
        runner.run(config_path=explicit)
    assert _FakeSystem.instances == []


def test_draw_error_is_reraised_after_teardown():
    boom = RuntimeError("draw failed")
    _FakeLoop.result = boom

    with pytest.raises(RuntimeError, match="draw failed"):
        runner.run()
    (system,) = _FakeSystem.instances
    assert system.closed
