# src/api/remote.py
from __future__ import annotations

from typing import Any, Dict, List, Protocol

from api import models
from api.client import ApiError, get_json, post_json
from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)


def _to_float(val) -> float:
    if val is None or val == "":
        return 0.0
    return float(val)


def _to_int(val) -> int:
    if val is None or val == "":
        return 0
    return int(val)


def _product_from_json(raw: Dict[str, Any]) -> models.Product:
    return models.Product(
        product_id=str(raw["productId"]),
        product_name=str(raw.get("productName") or ""),
        product_price=_to_float(raw.get("productPrice")),
        img=tuple(raw.get("img") or ()),
        categories=tuple(raw.get("categories") or ()),
        in_stock=_to_int(raw.get("inStock")),
        sold_stock_value=_to_int(raw.get("soldStockValue")),
        visibility=str(raw.get("visibility") or ""),
        created_at=raw.get("createdAt"),
        updated_at=raw.get("updatedAt"),
    )


def product_to_json(product: models.Product) -> Dict[str, Any]:
    """Backend (camelCase) representation of a product."""
    return {
        "productId": product.product_id,
        "productName": product.product_name,
        "productPrice": product.product_price,
        "img": list(product.img),
        "categories": list(product.categories),
        "inStock": product.in_stock,
        "soldStockValue": product.sold_stock_value,
        "visibility": product.visibility,
        "createdAt": product.created_at,
        "updatedAt": product.updated_at,
    }


def _order_from_json(raw: Dict[str, Any]) -> models.Order:
    price = raw.get("price")
    return models.Order(
        order_id=str(raw["orderId"]),
        tracking_id=str(raw.get("trackingId") or ""),
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        address=str(raw.get("address") or ""),
        price=_to_float(price),
        date=str(raw.get("date") or ""),
        time=str(raw.get("time") or ""),
        status=str(raw.get("status") or ""),
    )


# ---------------------------
# Reads
# ---------------------------


async def get_products() -> List[models.Product]:
    """
    Fetch the whole product list.
    Raises ApiError when the request fails or any record is malformed.
    """
    url = f"{config.PRODUCT_API_URL}/product/get-products"
    data = await get_json(url)
    try:
        products = [_product_from_json(p) for p in data["products"]]
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Malformed product list: {e!r}", url) from e
    _logger.info(f"Fetched {len(products)} products.")
    return products


async def get_orders() -> List[models.Order]:
    """
    Fetch the whole order list. The server status is carried over as-is;
    callers assign the displayed status through utils.status.
    """
    url = f"{config.ORDER_API_URL}/get-orders"
    data = await get_json(url)
    try:
        orders = [_order_from_json(o) for o in data["orders"]]
    except (KeyError, TypeError, ValueError) as e:
        raise ApiError(f"Malformed order list: {e!r}", url) from e
    _logger.info(f"Fetched {len(orders)} orders.")
    return orders


# ---------------------------
# Seller verification
# ---------------------------


async def verify_seller(seller_id: str) -> bool:
    """True only if the backend answers loggedIn == "loggedin". Never raises."""
    if not seller_id:
        return False
    try:
        data = await post_json(
            f"{config.ORDER_API_URL}/admin/verify-seller", {"sellerId": seller_id}
        )
    except ApiError as e:
        _logger.error(f"Error verifying seller {seller_id}: {e}")
        return False

    if data.get("loggedIn") != "loggedin":
        _logger.warning(f"Seller {seller_id} is not logged in: {data.get('loggedIn')!r}")
        return False
    return True


# ---------------------------
# Product writes
# ---------------------------


class ProductWriter(Protocol):
    """
    Remote write side for product edits. Each method returns True once the
    change has reached the backend.
    """

    async def save_product(self, product: models.Product) -> bool: ...

    async def add_image(self, product_id: str, url: str) -> bool: ...

    async def delete_image(self, product_id: str, url: str) -> bool: ...


class LocalOnlyProductWriter:
    """
    Default writer. The backend exposes no write endpoints, so nothing is
    sent and every change stays in the current view until the next fetch.
    """

    async def save_product(self, product: models.Product) -> bool:
        _logger.warning(
            f"Product {product.product_id} changed locally, not sent: "
            f"{product_to_json(product)}"
        )
        return False

    async def add_image(self, product_id: str, url: str) -> bool:
        _logger.warning(f"Image {url} added to {product_id} locally, not sent.")
        return False

    async def delete_image(self, product_id: str, url: str) -> bool:
        _logger.warning(f"Image {url} removed from {product_id} locally, not sent.")
        return False
