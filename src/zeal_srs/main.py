from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .logging import configure_logging, logger
from .middleware import AccessLogMiddleware, RequestIDMiddleware
from .routers import health, review

configure_logging()
app = FastAPI(title="Zeal SRS API", version=__version__)

# CORS（フロントエンドは別オリジンから呼び出す）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
# 後に追加したミドルウェアが外側になるため、RequestID を最後に追加してアクセスログへ ID を渡す
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(review.router, prefix="/api/review")  # 復習（SRS）関連エンドポイント
app.include_router(health.router)  # ヘルスチェック

logger.info(
    "app_initialized",
    environment=settings.environment,
    storage_backend=settings.srs_storage_backend,
)
