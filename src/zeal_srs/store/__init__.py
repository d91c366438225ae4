from __future__ import annotations

from ..config import Settings, settings
from ..logging import logger
from .backends import (
    FirestoreSlotStorage,
    MemorySlotStorage,
    SlotStorage,
    SQLiteSlotStorage,
    build_firestore_client,
)
from .records import RecordStore


def create_slot_storage(config: Settings) -> SlotStorage:
    """設定された永続化先に応じてスロットストレージを生成する。"""

    backend = config.srs_storage_backend
    if backend == "memory":
        return MemorySlotStorage()
    if backend == "firestore":
        client = build_firestore_client(config.firestore_project_id, config.firestore_emulator_host)
        return FirestoreSlotStorage(client, collection=config.firestore_collection)
    return SQLiteSlotStorage(config.srs_db_path)


def create_record_store(config: Settings | None = None) -> RecordStore:
    """アプリ全体で共有する RecordStore を初期化する。"""

    config = config or settings
    storage = create_slot_storage(config)
    logger.info(
        "srs_store_initialized",
        backend=config.srs_storage_backend,
        key=config.srs_storage_key,
    )
    return RecordStore(storage, key=config.srs_storage_key)


# module-level singleton store (wired to settings)
store = create_record_store()

__all__ = [
    "FirestoreSlotStorage",
    "MemorySlotStorage",
    "RecordStore",
    "SQLiteSlotStorage",
    "SlotStorage",
    "create_record_store",
    "create_slot_storage",
    "store",
]
