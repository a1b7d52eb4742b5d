"""
どこで: `tools/gen_reference_ramp.py`。
何を: 同梱の参照ランプ `src/gammaramp/resource/gamma-ramp32.png` を再生成する。
なぜ: 参照画像の中身（linear 光量が等間隔のランプを sRGB で符号化）を、コードと同じ規則で再現できるようにするため。
"""

from __future__ import annotations

import sys
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _ensure_src_on_syspath(repo_root: Path) -> None:
    src_dir = repo_root / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


def main() -> None:
    repo_root = _repo_root()
    _ensure_src_on_syspath(repo_root)

    from gammaramp.core.reference_image import BUNDLED_REFERENCE_NAME
    from gammaramp.core.reference_ramp import reference_ramp_image

    out_path = repo_root / "src" / "gammaramp" / "resource" / BUNDLED_REFERENCE_NAME
    image = reference_ramp_image(32)
    image.save(out_path, format="PNG", optimize=True)
    print(f"Wrote {out_path} ({image.width}x{image.height})")  # noqa: T201


if __name__ == "__main__":
    main()
