"""Pytest configuration shared by all test modules."""

import os

import pytest

# Keep imports of `zeal_srs.store` off the disk: the module-level store is
# built from settings at import time. 個別テストでは必要に応じて別ストアを生成する。
os.environ.setdefault("SRS_STORAGE_BACKEND", "memory")

T0 = 1_700_000_000_000


class FakeClock:
    """Deterministic millisecond clock; call it to read, assign `now` to move it."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_store(clock: FakeClock):
    from zeal_srs.store import MemorySlotStorage, RecordStore

    return RecordStore(MemorySlotStorage(), key="zeal-russian-saved", clock=clock)
