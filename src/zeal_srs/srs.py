"""SM-2 style review scheduling.

採点 1 回ぶんの状態遷移を純粋関数として提供する。永続化には触れず、
呼び出し側（ReviewFlow）が結果を RecordStore.apply で保存する。

- quality < 3: 想起失敗。repetitions/interval をリセットし 1 分後に再出題
- quality >= 3: 1 日 → 6 日 → 以降は interval * easeFactor（更新前の値）で伸ばす
- easeFactor は interval 算出の後に更新し、下限 1.3 で止める
"""

from __future__ import annotations

import math
import time

from .models.review import ReviewRecord


INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
PASSING_QUALITY = 3
MASTERED_REPETITIONS = 5

RETRY_DELAY_MS = 60 * 1000
DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _round_half_up(value: float) -> int:
    # 0.5 ちょうどは切り上げ（Python の round は偶数丸めになるため使わない）
    return int(math.floor(value + 0.5))


def ease_delta(quality: int) -> float:
    """Return the ease factor adjustment for a passing review."""
    miss = 5 - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def next_interval(repetitions: int, interval: int, ease_factor: float) -> int:
    """Interval in days for the given (already incremented) repetition count."""
    if repetitions == 1:
        return 1
    if repetitions == 2:
        return 6
    return _round_half_up(interval * ease_factor)


def schedule_review(record: ReviewRecord, quality: int, now: int) -> ReviewRecord:
    """Apply one review outcome and return the next record state.

    quality は範囲チェックしない。0, 2 や負値は失敗側、5 超は成功側として扱う。
    """
    if quality < PASSING_QUALITY:
        return record.model_copy(
            update={
                "repetitions": 0,
                "interval": 0,
                "next_review": now + RETRY_DELAY_MS,
            }
        )

    repetitions = record.repetitions + 1
    interval = next_interval(repetitions, record.interval, record.ease_factor)
    ease_factor = max(MIN_EASE_FACTOR, record.ease_factor + ease_delta(quality))
    return record.model_copy(
        update={
            "repetitions": repetitions,
            "interval": interval,
            "ease_factor": ease_factor,
            "next_review": now + interval * DAY_MS,
        }
    )


def new_record(item_id: str, now: int) -> ReviewRecord:
    """Build the initial state for a freshly saved item (due immediately)."""
    return ReviewRecord(
        item_id=item_id,
        saved_at=now,
        next_review=now,
        interval=0,
        ease_factor=INITIAL_EASE_FACTOR,
        repetitions=0,
    )


def is_mastered(record: ReviewRecord) -> bool:
    return record.repetitions >= MASTERED_REPETITIONS
