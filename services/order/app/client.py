"""
Order Service — サービス間通信クライアント

注文作成時に User Service と Product Service へ同期的に問い合わせ、
ユーザーの存在確認・商品の価格と在庫の取得を行う。

  ┌───────────────┐  GET /users/{id}     ┌──────────────┐
  │ Order Service │ ───────────────────▶ │ User Service │
  │               │  GET /products/{id}  ┌─────────────────┐
  │               │ ───────────────────▶ │ Product Service │
  └───────────────┘                      └─────────────────┘

失敗(ネットワークエラー・タイムアウト・200 以外・success: false)は
すべて ValidationFailure として呼び出し元に返す。
「サービスに到達できない」と「実体が存在しない」は区別しない。
リトライ・バックオフは行わない。
"""

import logging
from typing import Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .models import CreateOrderItem, OrderItem, Product, User

logger = logging.getLogger(__name__)


class ValidationFailure(Exception):
    """外部サービスによる検証の失敗。メッセージは人が読める理由。"""


class OrderValidationClient(Protocol):
    """注文ワークフローが必要とする検証操作。テストでは差し替える。"""

    async def check_user_exists(self, user_id: str) -> None: ...

    async def validate_order_items(self, items: list[CreateOrderItem]) -> list[OrderItem]: ...


class ServiceClient:
    """User Service / Product Service への HTTP クライアント"""

    def __init__(
        self,
        user_service_url: str,
        product_service_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user_url = user_service_url.rstrip("/")
        self.product_url = product_service_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get_user(self, user_id: str, client: httpx.AsyncClient | None = None) -> User:
        """User Service からユーザーを取得する。"""
        url = f"{self.user_url}/users/" + quote(user_id, safe="")
        data = await self._fetch(client, url, "user service")
        try:
            return User.model_validate(data)
        except ValidationError as e:
            raise ValidationFailure(f"failed to decode user service response: {e}") from e

    async def get_product(self, product_id: str, client: httpx.AsyncClient | None = None) -> Product:
        """Product Service から商品を取得する。"""
        url = f"{self.product_url}/products/" + quote(product_id, safe="")
        data = await self._fetch(client, url, "product service")
        try:
            return Product.model_validate(data)
        except ValidationError as e:
            raise ValidationFailure(f"failed to decode product service response: {e}") from e

    async def check_user_exists(self, user_id: str) -> None:
        user = await self.get_user(user_id)
        if user.id != user_id:
            raise ValidationFailure(f"user service returned user {user.id} for {user_id}")

    async def validate_order_items(self, items: list[CreateOrderItem]) -> list[OrderItem]:
        """
        明細をリクエスト順に検証し、商品のスナップショットを作る。

        最初に見つかった問題で全体を失敗させる(部分的な成功はない)。
        在庫は確認するだけで引き当てない。
        """
        order_items: list[OrderItem] = []

        async with self._client() as client:
            for item in items:
                try:
                    product = await self.get_product(item.product_id, client)
                except ValidationFailure as e:
                    raise ValidationFailure(f"invalid product {item.product_id}: {e}") from e
                if product.id != item.product_id:
                    raise ValidationFailure(f"invalid product {item.product_id}: product service returned {product.id}")

                if product.stock < item.quantity:
                    raise ValidationFailure(
                        f"insufficient stock for product {product.name}: "
                        f"available {product.stock}, requested {item.quantity}"
                    )

                order_items.append(
                    OrderItem(
                        product_id=product.id,
                        product_name=product.name,
                        price=product.price,
                        quantity=item.quantity,
                    )
                )

        return order_items

    async def _fetch(self, client: httpx.AsyncClient | None, url: str, service: str) -> dict:
        """GET して成功エンベロープの data を返す。"""
        try:
            if client is None:
                async with self._client() as own:
                    resp = await own.get(url)
            else:
                resp = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Call to %s failed: %s", url, e)
            raise ValidationFailure(f"failed to call {service}: {e}") from e

        if resp.status_code != 200:
            raise ValidationFailure(f"{service} returned status {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise ValidationFailure(f"failed to decode {service} response: {e}") from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error", "") if isinstance(body, dict) else ""
            raise ValidationFailure(f"{service} error: {error}")

        return body.get("data") or {}
