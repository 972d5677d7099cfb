"""
Order Service — FastAPI エントリーポイント

注文の作成・取得・ステータス更新を提供する。
注文作成時は User Service と Product Service に同期 HTTP で問い合わせ、
ユーザーと商品を検証してから注文を保存する。
"""

import logging
import os

from fastapi import Depends, FastAPI

from services.common.envelope import ok
from services.common.errors import install_error_handlers
from services.common.middleware import configure_logging, install_middleware

from . import commands, queries
from .client import OrderValidationClient, ServiceClient
from .models import CreateOrderRequest, UpdateOrderStatusRequest
from .repository import OrderRepository

USER_SERVICE_URL = os.environ.get("USER_SERVICE_URL", "http://localhost:8081")
PRODUCT_SERVICE_URL = os.environ.get("PRODUCT_SERVICE_URL", "http://localhost:8082")
SERVICE_CLIENT_TIMEOUT = float(os.environ.get("SERVICE_CLIENT_TIMEOUT", "10.0"))
PORT = int(os.environ.get("ORDER_SERVICE_PORT", "8083"))

logger = logging.getLogger(__name__)

order_repo = OrderRepository()
service_client = ServiceClient(USER_SERVICE_URL, PRODUCT_SERVICE_URL, timeout=SERVICE_CLIENT_TIMEOUT)


def get_repository() -> OrderRepository:
    return order_repo


def get_validation_client() -> OrderValidationClient:
    return service_client


app = FastAPI(title="Order Service")
install_middleware(app)
install_error_handlers(app)


# ── Command Endpoints (Write 側) ─────────────────


@app.post("/orders", status_code=201)
async def create_order(
    req: CreateOrderRequest,
    repo: OrderRepository = Depends(get_repository),
    client: OrderValidationClient = Depends(get_validation_client),
):
    """注文作成"""
    order = await commands.create_order(repo, client, req)
    return ok(order, message="Order created successfully", status_code=201)


@app.patch("/orders/{order_id}/status")
async def update_order_status(
    order_id: str,
    req: UpdateOrderStatusRequest,
    repo: OrderRepository = Depends(get_repository),
):
    """注文ステータス更新"""
    order = await commands.update_order_status(repo, order_id, req.status)
    return ok(order, message="Order status updated successfully")


# ── Query Endpoints (Read 側) ────────────────────


@app.get("/orders")
async def list_orders(repo: OrderRepository = Depends(get_repository)):
    """全注文一覧（管理用）"""
    return ok(await queries.list_orders(repo))


@app.get("/orders/user/{user_id}")
async def get_user_orders(
    user_id: str,
    repo: OrderRepository = Depends(get_repository),
    client: OrderValidationClient = Depends(get_validation_client),
):
    """指定ユーザーの注文一覧"""
    return ok(await queries.get_user_orders(repo, client, user_id))


@app.get("/orders/{order_id}")
async def get_order(order_id: str, repo: OrderRepository = Depends(get_repository)):
    """指定注文を取得"""
    return ok(await queries.get_order(repo, order_id))


@app.get("/health")
async def health():
    return ok(
        {"service": "order-service", "status": "UP"},
        message="Order service is healthy",
    )


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    logger.info("Order Service starting on port %d", PORT)
    logger.info("Connected to User Service: %s", USER_SERVICE_URL)
    logger.info("Connected to Product Service: %s", PRODUCT_SERVICE_URL)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
