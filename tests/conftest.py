from decimal import Decimal

import pytest

from shopcart.models import Product
from shopcart.services.cart import Cart
from shopcart.services.catalog import Catalog
from shopcart.services.pricing import PercentageDiscount


@pytest.fixture
def laptop():
    return Product("Laptop", Decimal("1000"), True)


@pytest.fixture
def headphones():
    return Product("Headphones", Decimal("50"), True)


@pytest.fixture
def tablet():
    """Listed but not for sale."""
    return Product("Tablet", Decimal("300"), False)


@pytest.fixture
def catalog(laptop, headphones, tablet):
    return Catalog([laptop, headphones, tablet])


@pytest.fixture
def events():
    return []


@pytest.fixture
def cart(catalog, events):
    return Cart(catalog, on_change=events.append)


@pytest.fixture
def discounted_cart(catalog, events):
    return Cart(catalog, discount=PercentageDiscount(Decimal("0.1")), on_change=events.append)
