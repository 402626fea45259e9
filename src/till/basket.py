"""Basket accumulation and total computation.

A basket counts scanned units per product and records which deals are
active. ``total`` prices each distinct product line through the first deal
(in add order) bound to that product, or at full price when none is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

from .catalog import Catalog, Product
from .currency import Currency
from .deals import Deal
from .errors import ProductNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["Basket", "Line"]


class Line(NamedTuple):
    product: Product
    quantity: int
    deal: Optional[Deal]
    amount: Currency


@dataclass(eq=False)
class Basket:
    """Scanned quantities for one checkout session.

    Not safe for concurrent mutation; the catalog it prices against may be
    shared between baskets.
    """

    catalog: Catalog

    def __post_init__(self) -> None:
        self._quantities: Dict[Product, int] = {}
        self._deals: List[Deal] = []

    def scan(self, identifier: str) -> None:
        """Add one unit of ``identifier`` to the basket.

        Raises:
            ProductNotFoundError: if the catalog has no such identifier. The
                basket is left unchanged.
        """
        product = self.catalog.lookup(identifier)
        if product is None:
            raise ProductNotFoundError(identifier)
        self._quantities[product] = self._quantities.get(product, 0) + 1
        logger.debug("Scanned %s (quantity=%d)", product.name, self._quantities[product])

    def add_deal(self, deal: Deal) -> None:
        if deal.product not in self.catalog:
            logger.debug("Deal %s targets unknown product %s; it will never apply", deal.name, deal.product)
        self._deals.append(deal)

    @property
    def deals(self) -> Tuple[Deal, ...]:
        return tuple(self._deals)

    def quantity(self, identifier: str) -> int:
        product = self.catalog.lookup(identifier)
        if product is None:
            return 0
        return self._quantities.get(product, 0)

    def _deal_for(self, product: Product) -> Optional[Deal]:
        for deal in self._deals:
            if deal.matches(product):
                return deal
        return None

    def lines(self) -> List[Line]:
        """Price every distinct product line, in first-scan order."""
        priced = []
        for product, quantity in self._quantities.items():
            deal = self._deal_for(product)
            if deal is None:
                amount = product.price * quantity
            else:
                amount = deal.kind.line_amount(quantity, product.price)
            priced.append(Line(product, quantity, deal, amount))
        return priced

    def total(self) -> Currency:
        total = Currency.sum(line.amount for line in self.lines())
        logger.debug("Basket total %s over %d line(s)", total, len(self._quantities))
        return total

    def __len__(self) -> int:
        return len(self._quantities)
