from __future__ import annotations

from typing import List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Label

import api.remote
from api.client import ApiError
from api.models import Product
from utils.draft import EDITABLE_FIELDS, ProductDraft
from utils.logger import get_logger
from utils.pure import (
    append_image,
    filter_products,
    find_product,
    format_price,
    remove_image,
    replace_product,
)
from views.base_screen import BaseScreen
from views.modal_dialog import ConfirmModal
from views.modal_image_viewer import ImageViewerModal

_logger = get_logger(__name__)

# Input id -> draft field
_FIELD_BY_INPUT = {input_id: field for field, input_id in EDITABLE_FIELDS.items()}


class ProductsScreen(BaseScreen):
    """
    Product table with a search box, single-row editing and an image gallery.

    Edits and image changes are applied to the local list first and then
    handed to the app's product writer; what the writer reports decides
    whether the operator is told the change is local only.
    """

    BINDINGS = [
        Binding("e", "edit", "Edit Row", show=True),
        Binding("i", "images", "View Images", show=True),
        Binding("ctrl+r", "refresh", "Reload", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.products: List[Product] = []
        self.query_str = ""
        self.draft: Optional[ProductDraft] = None
        self.selected_product_id: Optional[str] = None
        self._viewer: Optional[ImageViewerModal] = None

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Input(
                id="input-search", placeholder="Search by product ID or name..."
            )
            yield DataTable(id="table-products")
            with Horizontal(id="hort-edit-controls"):
                with Vertical():
                    yield Label("Name")
                    yield Input(id="input-edit-name")
                with Vertical():
                    yield Label("Categories")
                    yield Input(id="input-edit-categories", placeholder="a, b, c")
                with Vertical():
                    yield Label("Price")
                    yield Input(id="input-edit-price", type="number")
                with Vertical():
                    yield Label("In Stock")
                    yield Input(id="input-edit-stock", type="integer")
                with Vertical():
                    yield Label("Visibility")
                    yield Input(id="input-edit-visibility", placeholder="public")
                with Vertical(id="div-edit-btns"):
                    yield Button("Save", id="btn-save", variant="success")
                    yield Button("Cancel", id="btn-cancel-edit")
            with Horizontal(id="hort-table-control"):
                yield Button("Refresh", id="btn-refresh")
                yield Button("Edit", id="btn-edit")
                yield Button("View Images", id="btn-view-images", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(
            "Product ID",
            "Product Name",
            "Category",
            "Price",
            "In Stock",
            "Sold",
            "Visibility",
            "Images",
        )
        self.query_one("#hort-edit-controls").add_class("hidden")
        table.focus()

        self.load_products()

    # ---------------------------
    # Loading & rendering
    # ---------------------------

    @work(exclusive=True, group="products")
    async def load_products(self) -> None:
        try:
            products = await api.remote.get_products()
        except ApiError as e:
            _logger.error(f"Error fetching products: {e}")
            self.notify("Could not load products.", severity="error")
            products = []

        self.products = products
        self.cancel_edit()
        self.render_table()

    @property
    def visible_products(self) -> List[Product]:
        return filter_products(self.products, self.query_str)

    def render_table(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for p in self.visible_products:
            table.add_row(
                p.product_id,
                p.product_name,
                ", ".join(p.categories),
                format_price(p.product_price),
                p.in_stock,
                p.sold_stock_value,
                p.visibility,
                len(p.img),
                key=p.product_id,
            )

    @on(Input.Changed, "#input-search")
    def handle_search(self, event: Input.Changed) -> None:
        self.query_str = event.value
        self.render_table()

    def _cursor_product_id(self) -> Optional[str]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    # ---------------------------
    # Editing
    # ---------------------------

    @on(Button.Pressed, "#btn-edit")
    def action_edit(self) -> None:
        product_id = self._cursor_product_id()
        if product_id is not None:
            self.begin_edit(product_id)

    def begin_edit(self, product_id: str) -> None:
        """Stage a copy of the product; any other unsaved draft is dropped."""
        product = find_product(self.products, product_id)
        if product is None:
            return

        self.draft = ProductDraft.from_product(product)
        for field, input_id in EDITABLE_FIELDS.items():
            self.query_one(f"#{input_id}", Input).value = getattr(self.draft, field)
        self.query_one("#hort-edit-controls").remove_class("hidden")
        self.query_one("#input-edit-name", Input).focus()

    @on(Input.Changed)
    def handle_draft_input(self, event: Input.Changed) -> None:
        field = _FIELD_BY_INPUT.get(event.input.id)
        if field is not None and self.draft is not None:
            self.draft.set_field(field, event.value)

    @on(Button.Pressed, "#btn-cancel-edit")
    def cancel_edit(self) -> None:
        self.draft = None
        self.query_one("#hort-edit-controls").add_class("hidden")

    @on(Button.Pressed, "#btn-save")
    @work(exclusive=True, group="save")
    async def save_edit(self) -> None:
        if self.draft is None:
            return
        try:
            updated = self.draft.commit()
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        self.products = replace_product(self.products, updated)
        self.cancel_edit()
        self.render_table()

        if await self.app.product_writer.save_product(updated):
            self.notify(f"Product {updated.product_id} saved.")
        else:
            self.notify(
                f"Product {updated.product_id} updated locally only.",
                severity="warning",
            )

    # ---------------------------
    # Images
    # ---------------------------

    @on(Button.Pressed, "#btn-view-images")
    def action_images(self) -> None:
        product_id = self._cursor_product_id()
        if product_id is not None:
            self.open_image_viewer(product_id)

    def open_image_viewer(self, product_id: str) -> None:
        product = find_product(self.products, product_id)
        if product is None:
            return

        self.selected_product_id = product_id
        self._viewer = ImageViewerModal(
            product.img,
            on_close=self.handle_viewer_closed,
            on_add_image=self.handle_add_image,
            on_delete_image=self.handle_delete_image,
        )
        self.app.push_screen(self._viewer)

    def handle_viewer_closed(self) -> None:
        self._viewer = None
        self.selected_product_id = None

    def handle_add_image(self, url: str) -> None:
        if not self.selected_product_id:
            return
        self.products = append_image(self.products, self.selected_product_id, url)
        self._images_changed()
        self._push_image_change("add", self.selected_product_id, url)

    def handle_delete_image(self, url: str) -> None:
        if not self.selected_product_id:
            return
        self.products = remove_image(self.products, self.selected_product_id, url)
        self._images_changed()
        self._push_image_change("delete", self.selected_product_id, url)

    def _images_changed(self) -> None:
        product = find_product(self.products, self.selected_product_id)
        if self._viewer is not None and product is not None:
            self._viewer.set_images(product.img)
        self.render_table()

    @work(group="images")
    async def _push_image_change(self, kind: str, product_id: str, url: str) -> None:
        writer = self.app.product_writer
        if kind == "add":
            sent = await writer.add_image(product_id, url)
        else:
            sent = await writer.delete_image(product_id, url)
        if not sent:
            _logger.debug(f"Image {kind} for {product_id} kept local.")

    # ---------------------------
    # Reload
    # ---------------------------

    @on(Button.Pressed, "#btn-refresh")
    @work()
    async def action_refresh(self) -> None:
        if await self.app.push_screen_wait(
            ConfirmModal(
                "Reload products from the server? Unsaved local changes will be lost.",
                tone="warning",
            )
        ):
            self.load_products()
