#!/usr/bin/env python
"""ブラウザ版の保存済み単語（localStorage の書き出し）を SRS ストアへ取り込む。"""

from __future__ import annotations

from zeal_srs.importer import main

if __name__ == "__main__":
    raise SystemExit(main())
