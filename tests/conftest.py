import pytest

from till.catalog import Catalog, Product
from till.config import load_config
from till.pricelist import default_price_list


@pytest.fixture(autouse=True)
def clear_till_env(monkeypatch):
    for key in [
        "TILL_PRICE_LIST",
        "TILL_PAD_MINOR_UNITS",
        "TILL_STRICT_SCAN",
        "TILL_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def prices():
    return default_price_list()


@pytest.fixture
def catalog():
    return Catalog.from_products([Product.of("A0001", 1299), Product.of("A0002", 399)])
