"""Fixed-point money in integer minor units.

All arithmetic stays on integers; percentage reductions truncate the
fractional minor unit (floor division) and no floats are involved anywhere.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from .errors import PriceFormatError

__all__ = ["Currency", "MINOR_PER_MAJOR"]

MINOR_PER_MAJOR = 100

_PRICE_TEXT = re.compile(r"^([0-9]+)(?:\.([0-9]{1,2}))?$")


@dataclass(frozen=True, order=True)
class Currency:
    minor_units: int = 0

    def __add__(self, other: "Currency") -> "Currency":
        if isinstance(other, Currency):
            return Currency(self.minor_units + other.minor_units)
        return NotImplemented

    def __radd__(self, other):
        # builtin sum() starts from int 0
        if other == 0:
            return self
        return NotImplemented

    def __mul__(self, quantity: int) -> "Currency":
        if isinstance(quantity, int) and not isinstance(quantity, bool):
            return Currency(self.minor_units * quantity)
        return NotImplemented

    __rmul__ = __mul__

    def reduced_by(self, percent: int) -> "Currency":
        """Return this amount less ``percent`` per cent, truncated to a whole minor unit."""
        return Currency(self.minor_units * (100 - percent) // 100)

    @classmethod
    def sum(cls, values: Iterable["Currency"]) -> "Currency":
        return cls(sum(value.minor_units for value in values))

    @classmethod
    def parse(cls, text: str) -> "Currency":
        """Parse ``"12.99"`` / ``"3"`` / ``"0.5"`` into minor units.

        A single fractional digit means tenths, so ``"0.5"`` is 50 minor units.

        Raises:
            PriceFormatError: if ``text`` is not a non-negative decimal with at most two places.
        """
        match = _PRICE_TEXT.match(str(text).strip())
        if match is None:
            raise PriceFormatError(f"Invalid price {text!r}: expected a non-negative decimal like '12.99'")
        major, minor = match.groups()
        return cls(int(major) * MINOR_PER_MAJOR + int((minor or "0").ljust(2, "0")))

    def display(self, pad_minor: bool = False) -> str:
        """Render ``major.minor``.

        The default form does not zero-pad the minor part, so 1305 renders as
        ``"13.5"``. Pass ``pad_minor=True`` for ``"13.05"``.
        """
        major, minor = divmod(self.minor_units, MINOR_PER_MAJOR)
        if pad_minor:
            return f"{major}.{minor:02d}"
        return f"{major}.{minor}"

    def __str__(self) -> str:
        return self.display()
