from __future__ import annotations

import json
from typing import Callable, Iterable

from pydantic import ValidationError

from ..logging import logger
from ..models.review import ReviewRecord
from ..srs import new_record, now_ms
from .backends import SlotStorage


class RecordStore:
    """Keyed collection of review records persisted in a single storage slot.

    - 呼び出し毎にスロット全体を読み込み、1 件を変更して全体を書き戻す（read-modify-write）
    - プロセス内キャッシュは持たない
    - ロック/バージョン管理は無く、同時に書き込むと後勝ちになる
    - 永続データが壊れている場合は「保存済みアイテム無し」として扱い、例外は送出しない
    - ストレージの読み込み自体が失敗した場合、参照系は空を返し、更新系は例外を送出する
    """

    def __init__(
        self,
        storage: SlotStorage,
        key: str,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock

    # --- low-level helpers ---
    def _load(self, *, strict: bool = False) -> list[ReviewRecord]:
        """Read the slot.

        strict=True（書き込みを伴う操作）では読み込み失敗をそのまま送出する。
        空リストで上書きすると保存済みデータが消えるため。
        """
        try:
            raw = self._storage.read(self._key)
        except Exception as exc:
            if strict:
                raise
            logger.warning("srs_state_unreadable", key=self._key, error=repr(exc))
            return []
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.warning("srs_state_corrupt", key=self._key, reason="invalid_json", error=str(exc))
            return []
        if not isinstance(payload, list):
            logger.warning("srs_state_corrupt", key=self._key, reason="not_a_list")
            return []

        records: list[ReviewRecord] = []
        seen: set[str] = set()
        for entry in payload:
            try:
                record = ReviewRecord.model_validate(entry)
            except ValidationError as exc:
                logger.warning(
                    "srs_state_corrupt",
                    key=self._key,
                    reason="invalid_record",
                    errors=exc.error_count(),
                )
                return []
            # 重複 ID は先勝ち
            if record.item_id in seen:
                continue
            seen.add(record.item_id)
            records.append(record)
        return records

    def _save(self, records: list[ReviewRecord]) -> None:
        payload = [record.to_storage() for record in records]
        self._storage.write(self._key, json.dumps(payload, ensure_ascii=False))

    @staticmethod
    def _index_of(records: list[ReviewRecord], item_id: str) -> int:
        for idx, record in enumerate(records):
            if record.item_id == item_id:
                return idx
        return -1

    # --- public API ---
    def list_all(self) -> list[ReviewRecord]:
        """Return every saved record in insertion order."""
        return self._load()

    def get(self, item_id: str) -> ReviewRecord | None:
        records = self._load()
        idx = self._index_of(records, item_id)
        return records[idx] if idx >= 0 else None

    def exists(self, item_id: str) -> bool:
        return self._index_of(self._load(), item_id) >= 0

    def add(self, item_id: str) -> bool:
        """Save an item for scheduling; due immediately.

        既に保存済みなら何もしない（冪等）。新規作成したかどうかを返す。
        """
        records = self._load(strict=True)
        if self._index_of(records, item_id) >= 0:
            return False
        records.append(new_record(item_id, self._clock()))
        self._save(records)
        return True

    def remove(self, item_id: str) -> bool:
        records = self._load(strict=True)
        idx = self._index_of(records, item_id)
        if idx < 0:
            return False
        del records[idx]
        self._save(records)
        return True

    def due_as_of(self, now: int) -> list[ReviewRecord]:
        """Records whose next review is at or before `now`, in list order."""
        return [record for record in self._load() if record.is_due(now)]

    def import_records(self, incoming: Iterable[ReviewRecord]) -> int:
        """Append records whose id is not saved yet; existing records win.

        既存レコードは上書きしない。追加した件数を返す。
        """
        records = self._load(strict=True)
        seen = {record.item_id for record in records}
        added = 0
        for record in incoming:
            if record.item_id in seen:
                continue
            seen.add(record.item_id)
            records.append(record)
            added += 1
        if added:
            self._save(records)
        return added

    def apply(self, item_id: str, updated: ReviewRecord) -> bool:
        """Persist a mutated record in place.

        並行して削除されたアイテムへの更新は黙って捨てる。
        """
        records = self._load(strict=True)
        idx = self._index_of(records, item_id)
        if idx < 0:
            return False
        # ID と savedAt は既存レコードの値を保持する
        records[idx] = updated.model_copy(
            update={"item_id": item_id, "saved_at": records[idx].saved_at}
        )
        self._save(records)
        return True
