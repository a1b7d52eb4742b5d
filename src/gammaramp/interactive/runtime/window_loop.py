# どこで: `src/gammaramp/interactive/runtime/window_loop.py`。
# 何を: 1 つの pyglet ウィンドウを「再描画が必要なときだけ描く」フレームループで回すランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せつつ、状態（待機 / 再描画 / 破棄）と描画中の例外を明示的に扱うため。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """1つの pyglet window と「flip しない描画関数」を束ねる。"""

    # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
    window: Any

    # 1フレーム分の描画処理（back buffer へ描くだけ）。
    # `switch_to()` / `flip()` は pyglet（`Window.draw()`）が担当する前提。
    draw_frame: Callable[[], None]


class LoopState(Enum):
    """フレームループの状態。DESTROYED は終端。"""

    IDLE = "idle"
    WAITING = "waiting"
    REDRAW = "redraw"
    DESTROYED = "destroyed"


class FrameLoop:
    """再描画要求があるときだけ描く、単一ウィンドウのフレームループ。

    Notes
    -----
    - サイズ変更 / expose / show で「再描画が必要」に印を付ける。
    - `redraw_interval` ごとの tick で、印があるときだけ `Window.draw()` を呼ぶ。
    - ウィンドウを閉じると DESTROYED へ遷移し、pyglet の app loop を止める。
    - 描画中の例外は保持して DESTROYED へ遷移し、`run()` の戻り値として返す。
    """

    def __init__(
        self,
        task: WindowTask,
        *,
        redraw_interval: float,
        app: Any = None,
        clock: Any = None,
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        task : WindowTask
            描画したいウィンドウと描画処理。
        redraw_interval : float
            再描画要求を確認する間隔（秒）。正の値。
        app, clock : Any
            差し替え用（テスト）。None の場合は `pyglet.app` / `pyglet.clock`。
        """

        if float(redraw_interval) <= 0:
            raise ValueError(f"redraw_interval は正の値である必要がある: got={redraw_interval!r}")
        self._task = task
        self._interval = float(redraw_interval)
        self._app = pyglet.app if app is None else app
        self._clock = pyglet.clock if clock is None else clock
        self._state = LoopState.IDLE
        self._dirty = True
        self._error: Exception | None = None
        self._frames = 0

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def needs_redraw(self) -> bool:
        return self._dirty

    @property
    def error(self) -> Exception | None:
        """描画中に捕まえた例外（無ければ None）。"""
        return self._error

    @property
    def frame_count(self) -> int:
        return int(self._frames)

    def request_redraw(self, *_: object) -> None:
        """次の tick で再描画させる。"""
        # pyglet の on_resize などから呼ばれるため *args を受ける。
        if self._state is LoopState.DESTROYED:
            return
        self._dirty = True

    def request_exit(self, *_: object) -> None:
        """DESTROYED へ遷移し、app loop を止める。"""
        if self._state is LoopState.DESTROYED:
            return
        self._state = LoopState.DESTROYED
        self._app.exit()

    def tick(self, dt: float) -> None:
        """1 回分の待機 → (再描画 | 何もしない) を進める。"""
        if self._state is LoopState.DESTROYED:
            return

        window = self._task.window
        # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
        if window not in self._app.windows:
            return

        if not self._dirty:
            self._state = LoopState.WAITING
            return

        self._dirty = False
        self._state = LoopState.REDRAW
        try:
            # Window.draw は switch_to / on_draw / on_refresh / flip をまとめて行う。
            window.draw(dt)
        except Exception as exc:
            self._error = exc
            self.request_exit()
            return
        self._frames += 1
        self._state = LoopState.WAITING

    def run(self) -> Exception | None:
        """ウィンドウが閉じられるまでループを実行し、保持した例外（無ければ None）を返す。"""

        task = self._task
        task.window.push_handlers(
            on_close=self.request_exit,
            on_draw=task.draw_frame,
            on_resize=self.request_redraw,
            on_expose=self.request_redraw,
            on_show=self.request_redraw,
        )

        self._state = LoopState.WAITING
        self._clock.schedule_interval(self.tick, self._interval)
        try:
            self._app.run(interval=None)
        finally:
            self._clock.unschedule(self.tick)
            self._state = LoopState.DESTROYED
        return self._error
