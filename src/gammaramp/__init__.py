# どこで: `src/gammaramp/__init__.py`。
# 何を: ルート `gammaramp` パッケージを定義する。
# なぜ: import 起点を `gammaramp` に統一するため。

from __future__ import annotations

from gammaramp.api import run

__all__ = ["run"]
