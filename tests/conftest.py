from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches


@pytest.fixture(autouse=True)
def _clear_cache() -> None:
    caches["default"].clear()


@pytest.fixture
def buyer(db):
    return get_user_model().objects.create_user(
        username="donor", email="donor@example.com", password="pw"
    )


@pytest.fixture
def make_product(db):
    from jeevan_rakth.models import Product

    counter = iter(range(1, 10_000))

    def make(*, stock: int = 10, price: str = "25.00", name: str = "O+ kit"):
        return Product.objects.create(
            name=name, sku=f"SKU-{next(counter)}", price=Decimal(price), stock=stock
        )

    return make
