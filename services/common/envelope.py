"""
Common — レスポンスエンベロープ

全サービス共通のレスポンス形式:
    { success, message?, data?, error? }

成功時は data、失敗時は error のどちらか一方だけを埋める。
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool
    message: str | None = None
    data: Any = None
    error: str | None = None


def ok(data: Any = None, message: str | None = None, status_code: int = 200) -> JSONResponse:
    body = Envelope(success=True, message=message, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def fail(status_code: int, error: str) -> JSONResponse:
    body = Envelope(success=False, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
