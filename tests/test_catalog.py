import pytest

from till.catalog import Catalog, Product
from till.currency import Currency
from till.errors import CatalogFormatError


def test_lookup_returns_product_or_none(catalog):
    assert catalog.lookup("A0001") == Product("A0001", Currency(1299))
    assert catalog.lookup("missing") is None
    assert "A0002" in catalog
    assert len(catalog) == 2
    assert list(catalog) == ["A0001", "A0002"]


def test_product_equality_uses_name_and_price():
    assert Product.of("A0001", 1299) == Product.of("A0001", 1299)
    assert Product.of("A0001", 1299) != Product.of("A0001", 1300)
    assert hash(Product.of("A0001", 1299)) == hash(Product.of("A0001", 1299))


def test_catalog_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog.products["A0003"] = Product.of("A0003", 1)


def test_catalog_copies_its_source_mapping():
    source = {"A0001": Product.of("A0001", 1299)}
    catalog = Catalog(source)
    source["A0002"] = Product.of("A0002", 399)
    assert "A0002" not in catalog


def test_duplicate_identifiers_are_rejected():
    with pytest.raises(CatalogFormatError, match="A0001"):
        Catalog.from_products([Product.of("A0001", 1299), Product.of("A0001", 999)])


def test_catalogs_compare_by_contents_and_are_unhashable(catalog):
    same = Catalog.from_products([Product.of("A0001", 1299), Product.of("A0002", 399)])
    repriced = Catalog.from_products([Product.of("A0001", 1299), Product.of("A0002", 400)])

    assert catalog == same
    assert catalog != repriced
    assert catalog != {"A0001": Product.of("A0001", 1299)}
    with pytest.raises(TypeError):
        hash(catalog)
