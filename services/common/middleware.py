"""
Common — ロギング設定とミドルウェア

標準 logging を使う。各モジュールは logging.getLogger(__name__) を持つ。
"""

import logging
import os
import sys
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

logger = logging.getLogger("services.access")


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def install_middleware(app: FastAPI) -> None:
    """CORS とリクエストログのミドルウェアを登録する。"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        client = request.client.host if request.client else "-"
        logger.info(
            "[%s] %s %s %d %.1fms",
            request.method,
            request.url.path,
            client,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response
