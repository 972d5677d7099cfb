"""
Order Service — ドメインモデル

Order は集約ルート、OrderItem は Order に埋め込まれる値オブジェクト。

  - OrderItem は注文時点の商品名・単価のスナップショットを持つ。
    後から商品カタログが変わっても注文履歴は変わらない。
  - subtotal / total_price は派生値で、常に明細から計算される。
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    """
    注文ステータス

    状態遷移:
        PENDING → CONFIRMED → SHIPPED → DELIVERED
        PENDING / CONFIRMED → CANCELLED
    DELIVERED と CANCELLED は終端。それ以外の遷移は順序をチェックしない。
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str) -> "OrderStatus | None":
        try:
            return cls(value)
        except ValueError:
            return None


class OrderItem(BaseModel):
    product_id: str
    product_name: str
    price: float
    quantity: int

    @computed_field
    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Order(BaseModel):
    """注文集約"""

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @computed_field
    @property
    def total_price(self) -> float:
        return sum(item.subtotal for item in self.items)

    def can_be_cancelled(self) -> bool:
        return self.status in (OrderStatus.PENDING, OrderStatus.CONFIRMED)

    def is_terminal(self) -> bool:
        return self.status in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    def update_status(self, status: OrderStatus) -> None:
        self.status = status
        self.updated_at = _now()

    @classmethod
    def new(cls, user_id: str, items: list[OrderItem]) -> "Order":
        now = _now()
        return cls(user_id=user_id, items=items, created_at=now, updated_at=now)


# ── 外部サービスのデータ (読み取り専用) ────────────


class User(BaseModel):
    id: str
    name: str
    email: str


class Product(BaseModel):
    id: str
    name: str
    price: float
    stock: int


# ── Request Models ───────────────────────────────


class CreateOrderItem(BaseModel):
    product_id: str = ""
    quantity: int = 0


class CreateOrderRequest(BaseModel):
    user_id: str = ""
    items: list[CreateOrderItem] = []


class UpdateOrderStatusRequest(BaseModel):
    status: str = ""
