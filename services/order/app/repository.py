"""
Order Service — 注文リポジトリ

インメモリストアに注文を保持する。注文には ID 以外のユニーク制約はない。
"""

from services.common.store import InMemoryRepository

from .models import Order


class OrderRepository(InMemoryRepository[Order]):
    entity_name = "order"

    def get_by_user_id(self, user_id: str) -> list[Order]:
        """指定ユーザーの注文を作成日時順で返す。"""
        return self.list_all(lambda order: order.user_id == user_id)
