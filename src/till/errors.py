"""Structured till error taxonomy used for scan and price-list failures."""

from __future__ import annotations


class TillError(Exception):
    """Base class for all till domain exceptions."""

    def __init__(self, error_code: str, category: str, explanation: str):
        self.error_code = error_code
        self.category = category
        self.explanation = explanation
        super().__init__(f"[{self.category}:{self.error_code}] {self.explanation}")


class ProductNotFoundError(TillError, LookupError):
    """Raised by ``Basket.scan`` when an identifier has no catalog entry."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__("PRODUCT_NOT_FOUND", "SCAN", f"No product with identifier {identifier!r}")


class PriceFormatError(TillError, ValueError):
    def __init__(self, explanation: str):
        super().__init__("PRICE_FORMAT", "PRICE_LIST", explanation)


class CatalogFormatError(TillError, ValueError):
    def __init__(self, explanation: str):
        super().__init__("CATALOG_FORMAT", "PRICE_LIST", explanation)


class DealFormatError(TillError, ValueError):
    def __init__(self, explanation: str):
        super().__init__("DEAL_FORMAT", "PRICE_LIST", explanation)


class DealNotFoundError(TillError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__("DEAL_NOT_FOUND", "PRICE_LIST", f"No deal named {name!r}")
