from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Dict

from api.models import Product

# field name -> input widget id on the product screen
EDITABLE_FIELDS: Dict[str, str] = {
    "name": "input-edit-name",
    "categories": "input-edit-categories",
    "price": "input-edit-price",
    "stock": "input-edit-stock",
    "visibility": "input-edit-visibility",
}



def _price_text(price: float) -> str:
    # round-trips through float(); "20.0" is shown as "20"
    text = repr(price)
    return text.removesuffix(".0")

@dataclass
class ProductDraft:
    """
    Staging copy of a product while its row is in edit mode.

    Values are kept as the raw text typed by the operator and are only
    parsed by commit(), so a half typed price never reaches the list.
    """

    original: Product
    name: str
    categories: str
    price: str
    stock: str
    visibility: str

    @classmethod
    def from_product(cls, product: Product) -> ProductDraft:
        return cls(
            original=product,
            name=product.product_name,
            categories=", ".join(product.categories),
            price=_price_text(product.product_price),
            stock=str(product.in_stock),
            visibility=product.visibility,
        )

    @property
    def product_id(self) -> str:
        return self.original.product_id

    def set_field(self, field: str, value: str) -> None:
        if field not in EDITABLE_FIELDS:
            raise KeyError(f"Not an editable field: {field}")
        setattr(self, field, value)

    def commit(self) -> Product:
        """
        Build the edited product. Raises ValueError on a bad price or stock.
        """
        try:
            price = float(self.price)
        except ValueError:
            raise ValueError(f"Price must be a number, got {self.price!r}.") from None
        if price < 0:
            raise ValueError("Price cannot be negative.")

        try:
            stock = int(self.stock)
        except ValueError:
            raise ValueError(f"Stock must be a whole number, got {self.stock!r}.") from None
        if stock < 0:
            raise ValueError("Stock cannot be negative.")

        categories = tuple(c.strip() for c in self.categories.split(",") if c.strip())

        return dataclasses.replace(
            self.original,
            product_name=self.name.strip(),
            categories=categories,
            product_price=price,
            in_stock=stock,
            visibility=self.visibility.strip(),
        )
