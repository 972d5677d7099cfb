"""
Common — エラー分類とハンドラ

すべてのサービスで共通のエラー分類。
ハンドラ境界で HTTP ステータス + 標準エンベロープに変換する。
スタックトレースや内部識別子はクライアントに返さない。
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .envelope import fail

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """サービスエラーの基底クラス"""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(ServiceError):
    """リクエスト不正（JSON 不正・必須項目欠落・参照先不正・不正な状態遷移）"""

    status_code = 400


class NotFoundError(ServiceError):
    """ID がリポジトリに存在しない"""

    status_code = 404


class ConflictError(ServiceError):
    """ユニーク制約違反（メールアドレス・商品名の重複）"""

    status_code = 409


class InternalError(ServiceError):
    """永続化層の失敗など、クライアントでは対処できないエラー"""

    status_code = 500


def install_error_handlers(app: FastAPI) -> None:
    """ServiceError とリクエスト検証エラーをエンベロープに変換するハンドラを登録する。"""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        return fail(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Rejected payload for %s %s: %s", request.method, request.url.path, exc.errors())
        return fail(400, "Invalid JSON payload")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return fail(500, "Internal server error")
