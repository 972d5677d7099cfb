"""
Product Service — 商品リポジトリ

商品名は大文字小文字を区別せず一意。起動時にサンプル商品を投入する。
"""

from services.common.errors import BadRequestError, ConflictError
from services.common.store import InMemoryRepository

from .models import Product, ProductFilter

SAMPLE_PRODUCTS = [
    ("MacBook Pro 16\"", "Apple MacBook Pro with M3 chip", "Electronics", 2499.99, 10),
    ("iPhone 15 Pro", "Latest iPhone with titanium design", "Electronics", 999.99, 25),
    ("Nike Air Max", "Comfortable running shoes", "Footwear", 129.99, 50),
    ("Coffee Maker", "Automatic drip coffee maker", "Appliances", 89.99, 15),
    ("Wireless Headphones", "Noise-cancelling Bluetooth headphones", "Electronics", 199.99, 30),
]


class ProductRepository(InMemoryRepository[Product]):
    entity_name = "product"

    def __init__(self, seed: bool = True) -> None:
        super().__init__()
        if seed:
            for name, description, category, price, stock in SAMPLE_PRODUCTS:
                self.create(
                    Product(
                        name=name,
                        description=description,
                        category=category,
                        price=price,
                        stock=stock,
                    )
                )

    def search(self, product_filter: ProductFilter | None = None) -> list[Product]:
        if product_filter is None:
            return self.list_all()
        return self.list_all(product_filter.matches)

    def get_by_category(self, category: str) -> list[Product]:
        return self.search(ProductFilter(category=category))

    def update_stock(self, product_id: str, stock: int) -> Product:
        if stock < 0:
            raise BadRequestError("stock quantity cannot be negative")
        product = self.get_by_id(product_id)
        product.stock = stock
        product.touch()
        self.update(product)
        return product

    def _check_unique(self, entity: Product) -> None:
        name = entity.name.lower()
        if any(p.name.lower() == name and p.id != entity.id for p in self._items.values()):
            raise ConflictError("product with this name already exists")
