from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DB_PATH = ".data/srs.sqlite3"
DEFAULT_STORAGE_KEY = "zeal-russian-saved"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    環境変数から読み込まれるアプリ設定クラス。
    - environment: 実行環境（development/staging/production など）
    - srs_storage_backend: 復習レコードの永続化先（sqlite/memory/firestore）
    - srs_storage_key: レコード一覧を保持するスロット名
    """

    environment: str = Field(
        default="development",
        description="Runtime environment / 実行環境",
    )

    # --- SRS（復習）の永続化設定 ---
    srs_storage_backend: Literal["sqlite", "memory", "firestore"] = Field(
        default="sqlite",
        description="Backing storage for review records / 復習レコードの保存先",
    )
    srs_db_path: str = Field(
        default=DEFAULT_DB_PATH,
        description="Path to SRS SQLite database / SRS用SQLite DBパス",
    )
    srs_storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        description="Slot name holding the saved record list / 保存済みレコードのスロット名",
    )

    # --- Firestore ---
    firestore_project_id: str | None = Field(
        default=None,
        description="Firestore project ID / Firestore のプロジェクトID",
    )
    firestore_emulator_host: str | None = Field(
        default=None,
        description="Firestore emulator host (host:port) / エミュレータのホスト",
    )
    firestore_collection: str = Field(
        default="srs_slots",
        description="Firestore collection for storage slots / スロット保存用コレクション",
    )

    # --- Operations/Observability ---
    log_level: str = Field(
        default="INFO",
        description="Root log level / ルートロガーのレベル",
    )
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN (enable if set)")

    @field_validator("srs_storage_backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value

    # Pydantic v2 settings config
    # - env_file: .env を読み込む
    # - extra: .env に存在する未使用キーを無視
    # - case_sensitive: 環境変数キーの大小文字を区別しない
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )


settings = Settings()
