"""
Property-based tests for the review scheduler and record store.

Hypothesis generates arbitrary record states and quality scores (including
values outside the documented 0..5 range) to check the update invariants.
"""

import hypothesis.strategies as st
from hypothesis import given, settings

from zeal_srs.models.review import ReviewRecord
from zeal_srs.srs import MIN_EASE_FACTOR, RETRY_DELAY_MS, schedule_review
from zeal_srs.store import MemorySlotStorage, RecordStore

NOW_MAX = 4_000_000_000_000


@st.composite
def review_record_strategy(draw):
    """Generate a valid ReviewRecord state."""
    saved_at = draw(st.integers(min_value=0, max_value=NOW_MAX))
    repetitions = draw(st.integers(min_value=0, max_value=50))
    # interval == 0 となるのは未学習または失敗直後（repetitions == 0）のみ
    interval = 0 if repetitions == 0 else draw(st.integers(min_value=1, max_value=3650))
    return ReviewRecord(
        item_id=draw(st.text(min_size=1, max_size=12)),
        saved_at=saved_at,
        next_review=draw(st.integers(min_value=saved_at, max_value=NOW_MAX)),
        interval=interval,
        ease_factor=draw(st.floats(min_value=MIN_EASE_FACTOR, max_value=5.0)),
        repetitions=repetitions,
    )


now_strategy = st.integers(min_value=0, max_value=NOW_MAX)


class TestPassingReviews:
    @given(record=review_record_strategy(), quality=st.integers(min_value=3, max_value=20), now=now_strategy)
    @settings(max_examples=200, deadline=None)
    def test_ease_factor_keeps_floor(self, record, quality, now):
        updated = schedule_review(record, quality, now)
        assert updated.ease_factor >= MIN_EASE_FACTOR

    @given(record=review_record_strategy(), quality=st.integers(min_value=3, max_value=20), now=now_strategy)
    @settings(max_examples=200, deadline=None)
    def test_repetitions_increase_by_one(self, record, quality, now):
        updated = schedule_review(record, quality, now)
        assert updated.repetitions == record.repetitions + 1
        assert updated.interval >= 1
        assert updated.next_review == now + updated.interval * 86_400_000


class TestFailedReviews:
    @given(record=review_record_strategy(), quality=st.integers(min_value=-20, max_value=2), now=now_strategy)
    @settings(max_examples=200, deadline=None)
    def test_reset_and_short_retry(self, record, quality, now):
        updated = schedule_review(record, quality, now)
        assert updated.repetitions == 0
        assert updated.interval == 0
        assert now <= updated.next_review <= now + RETRY_DELAY_MS
        assert updated.ease_factor == record.ease_factor


class TestSaving:
    @given(
        item_id=st.text(min_size=1, max_size=12),
        first_save=now_strategy,
        later=st.integers(min_value=0, max_value=10_000_000),
        quality=st.integers(min_value=0, max_value=5),
    )
    @settings(max_examples=100, deadline=None)
    def test_saving_twice_keeps_existing_record(self, item_id, first_save, later, quality):
        current = {"now": first_save}
        store = RecordStore(MemorySlotStorage(), key="slot", clock=lambda: current["now"])
        store.add(item_id)
        store.apply(item_id, schedule_review(store.get(item_id), quality, first_save))
        before = store.get(item_id)

        current["now"] = first_save + later
        assert store.add(item_id) is False
        assert store.get(item_id) == before
        assert len(store.list_all()) == 1

    @given(item_id=st.text(min_size=1, max_size=12), now=now_strategy)
    @settings(max_examples=100, deadline=None)
    def test_freshly_saved_item_is_due(self, item_id, now):
        store = RecordStore(MemorySlotStorage(), key="slot", clock=lambda: now)
        store.add(item_id)
        assert [record.item_id for record in store.due_as_of(now)] == [item_id]
