"""Import saved words exported from the browser app.

ブラウザ版は localStorage の `zeal-russian-saved` に JSON 配列を保存している。
その値をファイルに書き出したものを読み込み、設定された RecordStore へ追加する。
既に保存済みの ID は上書きしない。
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from .logging import configure_logging, logger
from .models.review import ReviewRecord
from .store.records import RecordStore


@dataclass(frozen=True)
class ImportResult:
    added: int
    skipped_existing: int
    invalid: int


def parse_export(raw: str) -> tuple[list[ReviewRecord], int]:
    """Parse an exported record list.

    Returns the valid records (duplicates removed, first wins) and the number of
    invalid entries. JSON 自体が壊れている場合や配列でない場合は ValueError。
    """
    payload = json.loads(raw)
    if not isinstance(payload, list):
        raise ValueError("export must be a JSON array of saved records")

    records: list[ReviewRecord] = []
    seen: set[str] = set()
    invalid = 0
    for entry in payload:
        try:
            record = ReviewRecord.model_validate(entry)
        except ValidationError:
            invalid += 1
            continue
        if record.item_id in seen:
            continue
        seen.add(record.item_id)
        records.append(record)
    return records, invalid


def import_export(store: RecordStore, raw: str) -> ImportResult:
    records, invalid = parse_export(raw)
    added = store.import_records(records)
    result = ImportResult(added=added, skipped_existing=len(records) - added, invalid=invalid)
    logger.info(
        "srs_import_complete",
        added=result.added,
        skipped_existing=result.skipped_existing,
        invalid=result.invalid,
    )
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "export_path",
        type=Path,
        help="localStorage から書き出した JSON ファイルのパス",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()

    # store は import 時点で設定を読むため、引数解析の後に読み込む
    from .store import store

    try:
        raw = args.export_path.read_text(encoding="utf-8")
        result = import_export(store, raw)
    except (OSError, ValueError) as exc:
        logger.error("srs_import_failed", path=str(args.export_path), error=str(exc))
        return 1
    print(
        f"Imported {result.added} records "
        f"({result.skipped_existing} already saved, {result.invalid} invalid)."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
