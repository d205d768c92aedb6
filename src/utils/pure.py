import functools
import locale
from dataclasses import replace
from numbers import Real
from typing import Any, List, Literal, Optional, Sequence, Tuple

from api.models import Order, Product


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows, each a list of values (converted with str()).
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all center ('c').

    Returns:
        str: Markdown formatted table.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    # pipes inside a cell would split it
    rows = [[str(cell).replace("|", "\\|") for cell in row] for row in rows]

    if aligns is None:
        aligns = ["c"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(align_map[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


def format_price(price: Any) -> str:
    return f"Rs.{price:,.2f}" if isinstance(price, Real) else f"Rs.{price}"


# ---------------------------
# Sorting & filtering
# ---------------------------


def _is_number(val: Any) -> bool:
    return isinstance(val, Real) and not isinstance(val, bool)


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way compare used by the order table.
    Numbers compare numerically; anything else compares as lower-cased text
    through the current locale, with None treated as "".
    """
    if a is None:
        a = ""
    if b is None:
        b = ""
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    return locale.strcoll(str(a).lower(), str(b).lower())


def sort_orders(orders: Sequence[Order], key: str) -> List[Order]:
    """Ascending, stable sort on one Order attribute. Returns a new list."""
    return sorted(
        orders,
        key=functools.cmp_to_key(
            lambda x, y: compare_values(getattr(x, key, None), getattr(y, key, None))
        ),
    )


def filter_orders(orders: Sequence[Order], query: str) -> List[Order]:
    """Orders whose id or customer name contains query, case-insensitive."""
    needle = (query or "").strip().lower()
    return [
        o
        for o in orders
        if needle in (o.order_id or "").lower() or needle in (o.name or "").lower()
    ]


def filter_products(products: Sequence[Product], query: str) -> List[Product]:
    """Products whose id or name contains query, case-insensitive."""
    needle = (query or "").strip().lower()
    return [
        p
        for p in products
        if needle in p.product_id.lower() or needle in p.product_name.lower()
    ]


# ---------------------------
# Copy-on-write list updates
# ---------------------------


def replace_product(products: Sequence[Product], updated: Product) -> List[Product]:
    return [updated if p.product_id == updated.product_id else p for p in products]


def without_first(items: Sequence[str], value: str) -> Tuple[str, ...]:
    """items minus the first occurrence of value (unchanged if absent)."""
    items = tuple(items)
    if value not in items:
        return items
    i = items.index(value)
    return items[:i] + items[i + 1 :]


def append_image(
    products: Sequence[Product], product_id: Optional[str], url: str
) -> List[Product]:
    if not product_id:
        return list(products)
    return [
        replace(p, img=p.img + (url,)) if p.product_id == product_id else p
        for p in products
    ]


def remove_image(
    products: Sequence[Product], product_id: Optional[str], url: str
) -> List[Product]:
    if not product_id:
        return list(products)
    return [
        replace(p, img=without_first(p.img, url)) if p.product_id == product_id else p
        for p in products
    ]


def find_product(products: Sequence[Product], product_id: str) -> Optional[Product]:
    for p in products:
        if p.product_id == product_id:
            return p
    return None
