import pytest
from fastapi.testclient import TestClient

from services.order.app import main as order_main
from services.order.app.models import Product
from services.order.app.repository import OrderRepository
from services.product.app import main as product_main
from services.product.app.repository import ProductRepository
from services.user.app import main as user_main
from services.user.app.repository import UserRepository
from tests.fakes import FakeValidationClient


def assert_envelope(body: dict) -> None:
    """success matches which of data / error is populated, never both."""
    if body["success"]:
        assert "error" not in body
    else:
        assert "error" in body and "data" not in body


@pytest.fixture
def order_repo():
    return OrderRepository()


@pytest.fixture
def fake_client():
    return FakeValidationClient(
        users={"u1"},
        products=[Product(id="p1", name="Widget", price=10.0, stock=5)],
    )


@pytest.fixture
def order_api(order_repo, fake_client):
    app = order_main.app
    app.dependency_overrides[order_main.get_repository] = lambda: order_repo
    app.dependency_overrides[order_main.get_validation_client] = lambda: fake_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_repo():
    return UserRepository()


@pytest.fixture
def user_api(user_repo):
    app = user_main.app
    app.dependency_overrides[user_main.get_repository] = lambda: user_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def product_repo():
    return ProductRepository(seed=False)


@pytest.fixture
def product_api(product_repo):
    app = product_main.app
    app.dependency_overrides[product_main.get_repository] = lambda: product_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
