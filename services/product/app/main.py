"""
Product Service — FastAPI エントリーポイント

商品カタログの登録・検索・在庫更新を提供する。
Order Service は GET /products/{id} で価格と在庫を取得する。
注文が作られても在庫は減らない(引き当ては行わない)。
"""

import logging
import os

from fastapi import Depends, FastAPI

from services.common.envelope import ok
from services.common.errors import BadRequestError, install_error_handlers
from services.common.middleware import configure_logging, install_middleware

from .models import (
    CreateProductRequest,
    Product,
    ProductFilter,
    UpdateProductRequest,
    UpdateStockRequest,
)
from .repository import ProductRepository

PORT = int(os.environ.get("PRODUCT_SERVICE_PORT", "8082"))

logger = logging.getLogger(__name__)

product_repo = ProductRepository()


def get_repository() -> ProductRepository:
    return product_repo


app = FastAPI(title="Product Service")
install_middleware(app)
install_error_handlers(app)


# ── Command Endpoints ────────────────────────────


@app.post("/products", status_code=201)
async def create_product(req: CreateProductRequest, repo: ProductRepository = Depends(get_repository)):
    """商品登録"""
    if not req.name or not req.category or req.price <= 0:
        raise BadRequestError("Name, category, and positive price are required")
    if req.stock < 0:
        raise BadRequestError("stock quantity cannot be negative")

    product = Product(**req.model_dump())
    repo.create(product)
    logger.info("Product %s (%s) created", product.id, product.name)
    return ok(product, message="Product created successfully", status_code=201)


@app.put("/products/{product_id}")
async def update_product(
    product_id: str,
    req: UpdateProductRequest,
    repo: ProductRepository = Depends(get_repository),
):
    """指定されたフィールドだけを更新する。"""
    product = repo.get_by_id(product_id)
    changes = req.model_dump(exclude_none=True)
    if changes.get("stock", 0) < 0:
        raise BadRequestError("stock quantity cannot be negative")

    product = product.model_copy(update=changes)
    if not product.name or not product.category or product.price <= 0:
        raise BadRequestError("Name, category, and positive price are required")
    product.touch()
    repo.update(product)
    return ok(product, message="Product updated successfully")


@app.patch("/products/{product_id}/stock")
async def update_stock(
    product_id: str,
    req: UpdateStockRequest,
    repo: ProductRepository = Depends(get_repository),
):
    return ok(repo.update_stock(product_id, req.stock), message="Stock updated successfully")


# ── Query Endpoints ──────────────────────────────


@app.get("/products")
async def list_products(
    category: str = "",
    min_price: float = 0,
    max_price: float = 0,
    in_stock: bool = False,
    repo: ProductRepository = Depends(get_repository),
):
    """商品一覧（カテゴリ・価格帯・在庫有無で絞り込み可）"""
    product_filter = ProductFilter(
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )
    return ok(repo.search(product_filter))


@app.get("/products/category/{category}")
async def get_products_by_category(category: str, repo: ProductRepository = Depends(get_repository)):
    return ok(repo.get_by_category(category))


@app.get("/products/{product_id}")
async def get_product(product_id: str, repo: ProductRepository = Depends(get_repository)):
    return ok(repo.get_by_id(product_id))


@app.get("/health")
async def health():
    return ok(
        {"service": "product-service", "status": "UP"},
        message="Product service is healthy",
    )


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    logger.info("Product Service starting on port %d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
