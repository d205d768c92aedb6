# provide dataclass models for backend records

from dataclasses import dataclass
from typing import Optional, Tuple

ORDER_STATUSES: Tuple[str, ...] = (
    "Pending",
    "Processing",
    "Shipped",
    "Delivered",
    "Cancelled",
)


@dataclass(frozen=True)
class Product:
    product_id: str
    product_name: str
    product_price: float
    img: Tuple[str, ...]  # display order
    categories: Tuple[str, ...]
    in_stock: int
    sold_stock_value: int
    visibility: str  # "public" / "hidden", not enforced
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(frozen=True)
class Order:
    order_id: str
    tracking_id: str
    name: str
    email: str
    address: str
    price: float
    date: str
    time: str
    status: str = ""  # assigned client side, see utils.status
