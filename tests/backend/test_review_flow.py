from __future__ import annotations

import pytest

from zeal_srs.flows.review import ReviewFlow
from zeal_srs.models.review import ReviewQuality
from zeal_srs.srs import DAY_MS, RETRY_DELAY_MS


@pytest.fixture()
def flow(memory_store, clock) -> ReviewFlow:
    return ReviewFlow(memory_store, clock=clock)


def test_review_updates_and_persists(flow: ReviewFlow, clock):
    flow.save("w:privet")
    updated = flow.review("w:privet", ReviewQuality.EASY)
    assert updated is not None
    assert updated.repetitions == 1
    assert updated.next_review == clock.now + DAY_MS
    assert flow.store.get("w:privet") == updated
    assert flow.due() == []


def test_review_sequence_uses_current_clock(flow: ReviewFlow, clock):
    flow.save("w:privet")
    flow.review("w:privet", 5)
    clock.advance(DAY_MS)
    assert [r.item_id for r in flow.due()] == ["w:privet"]

    second = flow.review("w:privet", 5)
    assert second.interval == 6
    assert second.next_review == clock.now + 6 * DAY_MS

    clock.advance(6 * DAY_MS)
    third = flow.review("w:privet", 5)
    assert third.interval == 16

    failed = flow.review("w:privet", ReviewQuality.AGAIN)
    assert failed.interval == 0
    assert failed.ease_factor == pytest.approx(2.8)
    assert failed.next_review == clock.now + RETRY_DELAY_MS


def test_removed_item_is_not_resurrected_by_review(flow: ReviewFlow):
    flow.save("w:privet")
    flow.remove("w:privet")
    assert flow.is_saved("w:privet") is False
    assert flow.review("w:privet", 5) is None
    assert flow.records() == []


def test_review_of_unknown_item_is_noop(flow: ReviewFlow):
    flow.save("w:a")
    before = flow.records()
    assert flow.review("w:missing", 4) is None
    assert flow.records() == before


def test_toggle_switches_saved_state(flow: ReviewFlow):
    assert flow.toggle("w:da") is True
    assert flow.is_saved("w:da")
    assert flow.toggle("w:da") is False
    assert not flow.is_saved("w:da")


def test_stats_counts_total_due_and_mastered(flow: ReviewFlow, clock):
    for item_id in ("w:a", "w:b", "w:c"):
        flow.save(item_id)
    for _ in range(5):
        flow.review("w:a", ReviewQuality.GOOD)
    flow.review("w:b", ReviewQuality.HARD)

    stats = flow.stats()
    assert stats.total_cards == 3
    assert stats.due_cards == 1
    assert stats.mastered_cards == 1

    clock.advance(DAY_MS)
    assert flow.stats().due_cards == 2


def test_stats_on_empty_store(flow: ReviewFlow):
    stats = flow.stats()
    assert (stats.total_cards, stats.due_cards, stats.mastered_cards) == (0, 0, 0)
