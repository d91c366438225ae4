"""Slot storage backends.

復習レコード一覧は「名前付きスロット 1 つに JSON 文字列を丸ごと保存する」形式で
永続化する。ここではその読み書きだけを担う最小の KV 層を提供し、
RecordStore からは `read(key)` / `write(key, value)` のみを利用する。
"""

from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterator, Protocol

from google.cloud import firestore

from ..logging import logger


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class SlotStorage(Protocol):
    """Key/value medium holding one serialized value per slot."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemorySlotStorage:
    """In-process storage used by tests and `SRS_STORAGE_BACKEND=memory`."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def read(self, key: str) -> str | None:
        with self._lock:
            return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        with self._lock:
            self._slots[key] = value


class SQLiteSlotStorage:
    """SQLite-backed slot table.

    - 1 行 = 1 スロット（key, value, updated_at）
    - 呼び出し毎に接続を開閉し、プロセス内キャッシュは持たない
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._ensure_dirs()
        self._init_db()

    # --- low-level helpers ---
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self.db_path, timeout=10.0, isolation_level=None, check_same_thread=False
        )
        conn.row_factory = sqlite3.Row
        with conn:  # autocommit on pragma
            conn.execute("PRAGMA journal_mode=WAL;")
        return conn

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_dirs(self) -> None:
        p = Path(self.db_path)
        if p.parent and not p.parent.exists():
            p.parent.mkdir(parents=True, exist_ok=True)

    def _init_db(self) -> None:
        with self._conn() as conn:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS slots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    );
                    """
                )

    # --- public API ---
    def read(self, key: str) -> str | None:
        with self._conn() as conn:
            row = conn.execute("SELECT value FROM slots WHERE key = ?;", (key,)).fetchone()
            if row is None:
                return None
            return row["value"]

    def write(self, key: str, value: str) -> None:
        with self._conn() as conn:
            with conn:
                conn.execute(
                    """
                    INSERT INTO slots(key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at;
                    """,
                    (key, value, _now_iso()),
                )


class FirestoreSlotStorage:
    """Firestore-backed slots: one document per slot in a dedicated collection."""

    def __init__(self, client: firestore.Client, collection: str = "srs_slots") -> None:
        self._client = client
        self._collection = collection

    def _doc(self, key: str):
        return self._client.collection(self._collection).document(key)

    def read(self, key: str) -> str | None:
        snapshot = self._doc(key).get()
        if not snapshot.exists:
            return None
        payload = snapshot.to_dict() or {}
        value = payload.get("value")
        if not isinstance(value, str):
            logger.warning("srs_slot_not_text", key=key, value_type=type(value).__name__)
            return None
        return value

    def write(self, key: str, value: str) -> None:
        self._doc(key).set({"value": value, "updated_at": _now_iso()})


def _normalize_emulator_host(raw_host: str | None) -> str | None:
    """エミュレータのホスト文字列を正規化する。

    スキームなしの `localhost:8080` でもクライアントオプションに渡せるよう、
    http:// を自動付与する。空文字や None は未設定として扱う。
    """

    host = (raw_host or "").strip()
    if not host:
        return None
    if host.startswith(("http://", "https://")):
        return host
    return f"http://{host}"


def build_firestore_client(
    project_id: str | None, emulator_host: str | None = None
) -> firestore.Client:
    """Firestore クライアントを構築する。

    FIRESTORE_EMULATOR_HOST（設定または環境変数）があればエミュレータへ、
    無ければ Cloud Firestore へ接続する。
    """

    host = _normalize_emulator_host(emulator_host or os.environ.get("FIRESTORE_EMULATOR_HOST"))
    if host:
        # google-cloud-firestore は FIRESTORE_EMULATOR_HOST を検知して匿名認証へ切り替える。
        os.environ.setdefault(
            "FIRESTORE_EMULATOR_HOST", host.replace("http://", "").replace("https://", "")
        )
        return firestore.Client(project=project_id, client_options={"api_endpoint": host})
    return firestore.Client(project=project_id)
