from __future__ import annotations

from .models.review import FlashcardStats
from .srs import is_mastered
from .store.records import RecordStore


def compute_stats(store: RecordStore, now: int) -> FlashcardStats:
    """Summarize the saved collection for the dashboard.

    - total_cards: 保存済みレコード数
    - due_cards: now 時点で復習期限が来ている件数
    - mastered_cards: 連続正解 5 回以上の件数
    """
    records = store.list_all()
    return FlashcardStats(
        total_cards=len(records),
        due_cards=len(store.due_as_of(now)),
        mastered_cards=sum(1 for record in records if is_mastered(record)),
    )
