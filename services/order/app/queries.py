"""
Order Service — クエリハンドラ (読み取り側)

リポジトリへの委譲のみ。ユーザー別一覧は作成時と同様に
User Service でユーザーの存在を確認してから返す。
"""

import logging

from services.common.errors import BadRequestError

from .client import OrderValidationClient, ValidationFailure
from .models import Order
from .repository import OrderRepository

logger = logging.getLogger(__name__)


async def get_order(repo: OrderRepository, order_id: str) -> Order:
    return repo.get_by_id(order_id)


async def get_user_orders(
    repo: OrderRepository,
    client: OrderValidationClient,
    user_id: str,
) -> list[Order]:
    if not user_id:
        raise BadRequestError("User ID is required")
    try:
        await client.check_user_exists(user_id)
    except ValidationFailure as e:
        logger.warning("User validation failed: %s", e)
        raise BadRequestError("Invalid user ID") from e
    return repo.get_by_user_id(user_id)


async def list_orders(repo: OrderRepository) -> list[Order]:
    """全注文を作成日時順で返す。"""
    return repo.list_all()
