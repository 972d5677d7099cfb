"""
Product Service — 商品モデル
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Product(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    price: float
    category: str
    stock: int
    image_url: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def is_in_stock(self) -> bool:
        return self.stock > 0

    def touch(self) -> None:
        self.updated_at = _now()


class ProductFilter(BaseModel):
    """一覧取得時の絞り込み条件。0 / 空は「指定なし」。"""

    category: str = ""
    min_price: float = 0
    max_price: float = 0
    in_stock: bool = False

    def matches(self, product: Product) -> bool:
        if self.category and product.category.lower() != self.category.lower():
            return False
        if self.min_price > 0 and product.price < self.min_price:
            return False
        if self.max_price > 0 and product.price > self.max_price:
            return False
        if self.in_stock and not product.is_in_stock():
            return False
        return True


# ── Request Models ───────────────────────────────


class CreateProductRequest(BaseModel):
    name: str = ""
    description: str = ""
    price: float = 0
    category: str = ""
    stock: int = 0
    image_url: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    stock: int | None = None
    image_url: str | None = None


class UpdateStockRequest(BaseModel):
    stock: int
