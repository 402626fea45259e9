from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional

from .currency import Currency
from .errors import CatalogFormatError

__all__ = ["Catalog", "Product"]


@dataclass(frozen=True)
class Product:
    """A priced catalog entry. Equal only when both name and price match."""

    name: str
    price: Currency

    @classmethod
    def of(cls, name: str, minor_units: int) -> "Product":
        return cls(name=name, price=Currency(minor_units))


class Catalog:
    """Read-only mapping from product identifier to :class:`Product`.

    A catalog is built once and shared by every basket that prices against it.
    """

    __slots__ = ("_products",)

    def __init__(self, products: Mapping[str, Product]):
        self._products: Mapping[str, Product] = MappingProxyType(dict(products))

    @classmethod
    def from_products(cls, products: Iterable[Product]) -> "Catalog":
        """Key each product by its name.

        Raises:
            CatalogFormatError: if two products share a name.
        """
        keyed: Dict[str, Product] = {}
        for product in products:
            if product.name in keyed:
                raise CatalogFormatError(f"Duplicate product identifier {product.name!r}")
            keyed[product.name] = product
        return cls(keyed)

    def lookup(self, identifier: str) -> Optional[Product]:
        return self._products.get(identifier)

    @property
    def products(self) -> Mapping[str, Product]:
        return self._products

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._products

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return dict(self._products) == dict(other._products)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Catalog({list(self._products)!r})"
