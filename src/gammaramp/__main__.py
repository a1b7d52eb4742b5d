# どこで: `src/gammaramp/__main__.py`。
# 何を: `python -m gammaramp` / `gammaramp` コマンドのエントリポイント。ログ設定と終了コードの決定を行う。
# なぜ: 致命的なエラー（参照画像 / ウィンドウ作成 / 描画）をログに残し、非 0 の終了コードで返すため。

from __future__ import annotations

import logging

from gammaramp.core.reference_image import ReferenceImageError
from gammaramp.core.runtime_config import runtime_config

_logger = logging.getLogger("gammaramp")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main() -> int:
    """ランプ表示を実行し、プロセスの終了コードを返す。

    Returns
    -------
    int
        ウィンドウを閉じて正常終了した場合は 0。設定/参照画像/ウィンドウ/描画のエラーは 1。
    """

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        cfg = runtime_config()
    except (OSError, RuntimeError, ValueError) as exc:
        _logger.error("Failed to load configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(cfg.log_level)

    # GUI 依存（pyglet / ModernGL）はここで初めて import する。
    from gammaramp.api import run

    try:
        run()
    except ReferenceImageError:
        _logger.exception("Failed decoding reference ramp")
        return 1
    except Exception:
        _logger.exception("Gamma ramp window terminated with an error")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
