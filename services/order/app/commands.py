"""
Order Service — コマンドハンドラ (書き込み側)

注文作成ワークフロー:
  1. リクエストの形を検証
  2. User Service でユーザーの存在を確認
  3. Product Service で各明細を検証し、スナップショットを作る
  4. 合計金額を計算して注文を組み立てる (status = pending)
  5. リポジトリに保存

分散トランザクションはない。検証後に保存が失敗しても補償処理はせず、
Internal エラーとして返す。在庫の引き当ても行わないため、
同じ商品への同時注文はどちらも検証を通過しうる。
"""

import logging

from services.common.errors import BadRequestError, InternalError

from .client import OrderValidationClient, ValidationFailure
from .models import CreateOrderRequest, Order, OrderStatus
from .repository import OrderRepository

logger = logging.getLogger(__name__)


async def create_order(
    repo: OrderRepository,
    client: OrderValidationClient,
    req: CreateOrderRequest,
) -> Order:
    """注文作成コマンド"""
    if not req.user_id or not req.items:
        raise BadRequestError("User ID and at least one item are required")
    if any(not item.product_id or item.quantity < 1 for item in req.items):
        raise BadRequestError("Each item requires a product_id and a positive quantity")

    try:
        await client.check_user_exists(req.user_id)
    except ValidationFailure as e:
        logger.warning("User validation failed: %s", e)
        raise BadRequestError("Invalid user ID") from e

    try:
        order_items = await client.validate_order_items(req.items)
    except ValidationFailure as e:
        logger.warning("Order items validation failed: %s", e)
        raise BadRequestError(str(e)) from e

    order = Order.new(req.user_id, order_items)
    try:
        repo.create(order)
    except Exception as e:
        logger.exception("Error creating order %s", order.id)
        raise InternalError("Failed to create order") from e

    logger.info("Order %s created for user %s (total %.2f)", order.id, order.user_id, order.total_price)
    return order


async def update_order_status(
    repo: OrderRepository,
    order_id: str,
    status: str,
) -> Order:
    """
    注文ステータス更新コマンド

    キャンセルは pending / confirmed からのみ許可する。
    cancelled / delivered は終端で、そこからは遷移できない。
    それ以外の遷移は順序をチェックしない(pending → delivered も可)。
    """
    new_status = OrderStatus.parse(status)
    if new_status is None:
        raise BadRequestError("Invalid order status")

    order = repo.get_by_id(order_id)

    if new_status is OrderStatus.CANCELLED and not order.can_be_cancelled():
        raise BadRequestError("Order cannot be cancelled in current status")
    if order.is_terminal():
        raise BadRequestError(f"Order status cannot change from {order.status.value}")

    order.update_status(new_status)
    try:
        repo.update(order)
    except Exception as e:
        logger.exception("Error updating order status for %s", order_id)
        raise InternalError("Failed to update order status") from e

    logger.info("Order %s moved to %s", order.id, order.status.value)
    return order
