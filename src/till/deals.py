"""Promotional deal rules, each bound to one product identifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .currency import Currency
from .errors import DealFormatError

__all__ = [
    "BuyOneGetOneFree",
    "Deal",
    "DealKind",
    "PercentageDiscount",
    "parse_deal_kind",
]


@dataclass(frozen=True)
class BuyOneGetOneFree:
    """Every second unit is free: ``ceil(quantity / 2)`` units are billed."""

    tag = "buy1get1free"

    @property
    def label(self) -> str:
        return "Buy1Get1Free"

    def line_amount(self, quantity: int, unit_price: Currency) -> Currency:
        return unit_price * -(-quantity // 2)


@dataclass(frozen=True)
class PercentageDiscount:
    """``percent`` off the whole line, truncated to a whole minor unit."""

    percent: int
    tag = "percentage"

    def __post_init__(self) -> None:
        if isinstance(self.percent, bool) or not isinstance(self.percent, int):
            raise DealFormatError(f"Discount percent must be an integer, got {type(self.percent).__name__}")
        if not 0 <= self.percent <= 100:
            raise DealFormatError(f"Discount percent must be between 0 and 100, got {self.percent}")

    @property
    def label(self) -> str:
        return f"{self.percent}Percent"

    def line_amount(self, quantity: int, unit_price: Currency) -> Currency:
        return (unit_price * quantity).reduced_by(self.percent)


DealKind = Union[BuyOneGetOneFree, PercentageDiscount]


@dataclass(frozen=True)
class Deal:
    product: str
    kind: DealKind
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.name is None:
            object.__setattr__(self, "name", f"{self.product}:{self.kind.label}")

    def matches(self, product) -> bool:
        return self.product == product.name


def parse_deal_kind(kind: str, percent: Optional[int] = None) -> DealKind:
    """Build a deal kind from its textual tag.

    Raises:
        DealFormatError: for an unknown tag or a missing/invalid percent.
    """
    normalized = str(kind).strip().lower()
    if normalized == BuyOneGetOneFree.tag:
        return BuyOneGetOneFree()
    if normalized == PercentageDiscount.tag:
        if percent is None:
            raise DealFormatError("Percentage deal requires a 'percent' value")
        return PercentageDiscount(percent)
    raise DealFormatError(
        f"Unknown deal kind {kind!r}: expected '{BuyOneGetOneFree.tag}' or '{PercentageDiscount.tag}'"
    )
