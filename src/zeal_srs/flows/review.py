from __future__ import annotations

from typing import Callable

from ..logging import logger
from ..models.review import FlashcardStats, ReviewRecord
from ..srs import now_ms, schedule_review
from ..stats import compute_stats
from ..store.records import RecordStore


class ReviewFlow:
    """Review session operations offered to the flashcard UI.

    保存/削除/保存状態の確認、期限到来カードの取得、採点、統計をまとめたフロー。
    採点は `schedule_review` で次の状態を計算し、`RecordStore.apply` で保存する。
    未登録 ID への操作はエラーにせず何もしない。
    """

    def __init__(self, store: RecordStore, *, clock: Callable[[], int] = now_ms) -> None:
        self.store = store
        self.clock = clock

    def save(self, item_id: str) -> bool:
        created = self.store.add(item_id)
        logger.info("srs_item_saved", item_id=item_id, created=created)
        return created

    def remove(self, item_id: str) -> bool:
        removed = self.store.remove(item_id)
        logger.info("srs_item_removed", item_id=item_id, removed=removed)
        return removed

    def is_saved(self, item_id: str) -> bool:
        return self.store.exists(item_id)

    def toggle(self, item_id: str) -> bool:
        """保存済みなら削除、未保存なら保存し、操作後の保存状態を返す。"""
        if self.store.exists(item_id):
            self.remove(item_id)
            return False
        self.save(item_id)
        return True

    def records(self) -> list[ReviewRecord]:
        return self.store.list_all()

    def due(self) -> list[ReviewRecord]:
        return self.store.due_as_of(self.clock())

    def review(self, item_id: str, quality: int) -> ReviewRecord | None:
        """Grade one item and persist its next state.

        Returns the updated record, or None when the item is not saved.
        削除済みアイテムを採点しても復活させない。
        """
        current = self.store.get(item_id)
        if current is None:
            logger.info("srs_review_skipped", item_id=item_id, quality=quality, reason="not_found")
            return None

        updated = schedule_review(current, quality, self.clock())
        if not self.store.apply(item_id, updated):
            # get と apply の間に削除された場合
            logger.info("srs_review_skipped", item_id=item_id, quality=quality, reason="removed")
            return None

        logger.info(
            "srs_item_reviewed",
            item_id=item_id,
            quality=quality,
            repetitions=updated.repetitions,
            interval=updated.interval,
            ease_factor=round(updated.ease_factor, 4),
            next_review=updated.next_review,
        )
        return updated

    def stats(self) -> FlashcardStats:
        return compute_stats(self.store, self.clock())
