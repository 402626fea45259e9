"""till: point-of-sale basket pricing with per-product deals."""

__version__ = "0.1.0"

from .basket import Basket, Line
from .catalog import Catalog, Product
from .currency import Currency
from .deals import BuyOneGetOneFree, Deal, PercentageDiscount
from .errors import ProductNotFoundError, TillError

__all__ = [
    "Basket",
    "BuyOneGetOneFree",
    "Catalog",
    "Currency",
    "Deal",
    "Line",
    "PercentageDiscount",
    "Product",
    "ProductNotFoundError",
    "TillError",
    "__version__",
]
