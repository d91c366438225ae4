"""Logging utilities.

構造化ログの初期化をまとめて提供する。標準 logging の出力はメッセージのみに
固定し、structlog が JSON 1 行を組み立てる。リクエスト単位の値（request_id 等）は
contextvars 経由で全イベントへ付与される。
"""

import logging

import structlog
from structlog import contextvars as structlog_contextvars

from .config import settings


def configure_logging() -> None:
    """Configure structlog for application-wide logging.

    アプリ全体のロギング設定を行う。標準 logging を設定レベルで初期化し、
    structlog で ISO タイムスタンプと JSON 形式の出力を有効化する。
    """
    # stdlib 側の出力に余計なプレフィックス（"INFO:logger:" など）を付けない
    # ため、フォーマットはメッセージのみ(%(message)s)に固定する。
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog_contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    if settings.sentry_dsn:
        _init_sentry(settings.sentry_dsn)


def _init_sentry(dsn: str) -> None:
    import sentry_sdk
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_logging = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR,
    )
    try:
        sentry_sdk.init(dsn=dsn, integrations=[sentry_logging])
    except Exception as exc:
        # Sentry 初期化に失敗してもアプリは継続
        logger.warning("sentry_init_failed", error=repr(exc))


logger = structlog.get_logger()
