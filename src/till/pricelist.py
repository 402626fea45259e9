"""Price list loading: the catalog and deal set a till is seeded with.

A price list file is TOML or JSON (chosen by suffix)::

    [products]
    A0001 = 1299          # minor units
    A0002 = "3.99"        # or a decimal string

    [[deals]]
    product = "A0002"
    kind = "buy1get1free"

    [[deals]]
    product = "A0001"
    kind = "percentage"
    percent = 10
    name = "ten-off-A0001"
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .catalog import Catalog, Product
from .config import load_toml_text
from .currency import Currency
from .deals import BuyOneGetOneFree, Deal, PercentageDiscount, parse_deal_kind
from .errors import CatalogFormatError, DealFormatError, DealNotFoundError, PriceFormatError

logger = logging.getLogger(__name__)

__all__ = ["PriceList", "default_price_list", "load_price_list", "parse_price_list"]


@dataclass(frozen=True)
class PriceList:
    catalog: Catalog
    deals: Tuple[Deal, ...] = ()

    def deal(self, name: str) -> Deal:
        for deal in self.deals:
            if deal.name == name:
                return deal
        raise DealNotFoundError(name)


def default_price_list() -> PriceList:
    """Reference store data: two products and one deal for each."""
    catalog = Catalog.from_products([Product.of("A0001", 1299), Product.of("A0002", 399)])
    deals = (
        Deal("A0002", BuyOneGetOneFree()),
        Deal("A0001", PercentageDiscount(10)),
    )
    return PriceList(catalog=catalog, deals=deals)


def _parse_price(identifier: str, value: Any) -> Currency:
    if isinstance(value, bool):
        raise CatalogFormatError(f"Product {identifier!r}: price must be a number of minor units or a decimal string")
    if isinstance(value, int):
        if value < 0:
            raise CatalogFormatError(f"Product {identifier!r}: price must not be negative, got {value}")
        return Currency(value)
    if isinstance(value, str):
        try:
            return Currency.parse(value)
        except PriceFormatError as exc:
            raise CatalogFormatError(f"Product {identifier!r}: {exc.explanation}") from exc
    raise CatalogFormatError(
        f"Product {identifier!r}: expected integer minor units or decimal string, got {type(value).__name__}"
    )


def _parse_products(raw: Any) -> Catalog:
    if not isinstance(raw, dict):
        raise CatalogFormatError("Price list missing required table: products")
    products = []
    for identifier, value in raw.items():
        if not str(identifier).strip():
            raise CatalogFormatError("Product identifier must be a non-empty string")
        products.append(Product(name=str(identifier), price=_parse_price(str(identifier), value)))
    return Catalog.from_products(products)


def _parse_deal(index: int, entry: Any) -> Deal:
    if not isinstance(entry, dict):
        raise DealFormatError(f"Deal #{index}: expected a table, got {type(entry).__name__}")
    product = entry.get("product")
    if not isinstance(product, str) or not product.strip():
        raise DealFormatError(f"Deal #{index}: missing required string field 'product'")
    if "kind" not in entry:
        raise DealFormatError(f"Deal #{index}: missing required field 'kind'")
    name = entry.get("name")
    if name is not None and not isinstance(name, str):
        raise DealFormatError(f"Deal #{index}: 'name' must be a string")
    try:
        kind = parse_deal_kind(entry["kind"], entry.get("percent"))
    except DealFormatError as exc:
        raise DealFormatError(f"Deal #{index} ({product}): {exc.explanation}") from exc
    return Deal(product=product, kind=kind, name=name)


def _parse_deals(raw: Any, catalog: Catalog) -> Tuple[Deal, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DealFormatError("Price list field 'deals' must be an array of tables")
    deals: List[Deal] = []
    seen: Dict[str, int] = {}
    for index, entry in enumerate(raw):
        deal = _parse_deal(index, entry)
        if deal.name in seen:
            raise DealFormatError(f"Deal #{index}: name {deal.name!r} already used by deal #{seen[deal.name]}")
        seen[deal.name] = index
        if deal.product not in catalog:
            logger.warning("Deal %s targets %s, which is not in the catalog; it will never apply", deal.name, deal.product)
        deals.append(deal)
    return tuple(deals)


def parse_price_list(raw: Dict[str, Any]) -> PriceList:
    """Validate a decoded price list document.

    Raises:
        CatalogFormatError: if the products table is missing or malformed.
        DealFormatError: if a deal entry is malformed.
    """
    if not isinstance(raw, dict):
        raise CatalogFormatError("Price list must be a table/object")
    catalog = _parse_products(raw.get("products"))
    deals = _parse_deals(raw.get("deals"), catalog)
    logger.debug("Loaded price list: %d product(s), %d deal(s)", len(catalog), len(deals))
    return PriceList(catalog=catalog, deals=deals)


def load_price_list(path: Optional[str]) -> PriceList:
    """Load a price list file, or the reference data when ``path`` is unset."""
    if not path:
        return default_price_list()
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CatalogFormatError(f"Price list {path} is not valid UTF-8: {exc.reason} at byte {exc.start}") from exc
    except OSError as exc:
        raise CatalogFormatError(f"Cannot read price list {path}: {exc.strerror or exc}") from exc
    if source.suffix.lower() == ".json":
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CatalogFormatError(f"Price list {path} is not valid JSON: {exc}") from exc
    else:
        try:
            raw = load_toml_text(text)
        except ValueError as exc:
            raise CatalogFormatError(f"Price list {path} is not valid TOML: {exc}") from exc
    return parse_price_list(raw)
