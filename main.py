"""
どこで: リポジトリ直下 `main.py`。
何を: インストールせずにランプ表示を起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

from gammaramp.__main__ import main

if __name__ == "__main__":
    raise SystemExit(main())
