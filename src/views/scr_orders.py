from typing import List, Optional

from rich.text import Text
from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Input

import api.remote
from api.client import ApiError
from api.models import Order
from utils.logger import get_logger
from utils.messages import SellerRejectedMessage
from utils.pure import filter_orders, format_price, sort_orders
from utils.status import assign_statuses
from views.base_screen import BaseScreen
from views.modal_order_detail import OrderDetailModal

_logger = get_logger(__name__)

# column key (Order attribute) -> header label
ORDER_COLUMNS = {
    "order_id": "Order ID",
    "date": "Date",
    "time": "Time",
    "name": "Name",
    "email": "Email",
    "price": "Price",
    "status": "Status",
}

STATUS_STYLES = {
    "Pending": "bold yellow",
    "Processing": "bold blue",
    "Shipped": "bold green",
    "Delivered": "bold magenta",
    "Cancelled": "bold red",
}


def status_badge(status: str) -> Text:
    return Text(f" {status} ", style=STATUS_STYLES.get(status, "dim"))


class OrdersScreen(BaseScreen):
    """
    Sortable, searchable order table.

    Nothing is fetched until the current seller has been verified; a missing
    or rejected seller sends the app back to the login screen.
    """

    BINDINGS = [
        Binding("enter", "noop", "View Order", show=True, key_display="⏎"),
        Binding("ctrl+r", "refresh", "Reload", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.orders: List[Order] = []  # as fetched
        self.sorted_orders: List[Order] = []
        self.sort_key: Optional[str] = None
        self.query_str = ""
        self.selected_order: Optional[Order] = None
        self._loaded_for: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Input(
                id="input-search", placeholder="Search by order ID or customer name..."
            )
            yield DataTable(id="table-orders")
        with Horizontal(id="hort-table-control"):
            yield Button("Refresh", id="btn-refresh")
            yield Button("View", id="btn-view-order", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        for key, label in ORDER_COLUMNS.items():
            table.add_column(label, key=key)

    @on(ScreenResume)
    def handle_resume(self) -> None:
        # also fires when a modal on top closes; only reload for a new seller
        seller_id = self.app.state.seller_id
        if seller_id is None or self._loaded_for != seller_id:
            self._loaded_for = seller_id
            self.initialize()

    @work(exclusive=True, group="orders")
    async def initialize(self) -> None:
        """Verify the seller, then fetch. Never fetches for an unverified seller."""
        state = self.app.state
        if not state.seller_id:
            self.app.post_message(SellerRejectedMessage("No seller id given."))
            return

        if not await state.verify():
            self._loaded_for = None
            self.app.post_message(
                SellerRejectedMessage(f"Seller {state.seller_id} is not logged in.")
            )
            return

        await self.load_orders()

    async def load_orders(self) -> None:
        try:
            orders = await api.remote.get_orders()
        except ApiError as e:
            _logger.error(f"Error fetching orders: {e}")
            self.notify("Could not load orders.", severity="error")
            orders = []

        self.orders = assign_statuses(orders, self.app.status_strategy)
        self.sorted_orders = list(self.orders)
        self.sort_key = None
        self.render_table()

    @property
    def displayed_orders(self) -> List[Order]:
        return filter_orders(self.sorted_orders, self.query_str)

    def render_table(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for o in self.displayed_orders:
            table.add_row(
                o.order_id,
                o.date,
                o.time,
                o.name,
                o.email,
                format_price(o.price),
                status_badge(o.status),
                key=o.order_id,
            )

    # ---------------------------
    # Sort & search
    # ---------------------------

    @on(DataTable.HeaderSelected)
    def handle_header_selected(self, event: DataTable.HeaderSelected) -> None:
        self.sort_by(event.column_key.value)

    def sort_by(self, key: str) -> None:
        """Ascending sort of the fetched list (not of the current view)."""
        if key not in ORDER_COLUMNS:
            return
        self.sort_key = key
        self.sorted_orders = sort_orders(self.orders, key)
        self.render_table()

    @on(Input.Changed, "#input-search")
    def handle_search(self, event: Input.Changed) -> None:
        self.set_query(event.value)

    def set_query(self, query: str) -> None:
        self.query_str = query
        self.render_table()

    # ---------------------------
    # Detail
    # ---------------------------

    @on(DataTable.RowSelected)
    def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        self.view_order(event.row_key.value)

    @on(Button.Pressed, "#btn-view-order")
    def handle_view_pressed(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        self.view_order(row_key.value)

    def view_order(self, order_id: str) -> None:
        for o in self.sorted_orders:
            if o.order_id == order_id:
                self.selected_order = o
                self.app.push_screen(OrderDetailModal(o), self.handle_detail_closed)
                return

    def handle_detail_closed(self, _result: None = None) -> None:
        self.selected_order = None

    @on(Button.Pressed, "#btn-refresh")
    def action_refresh(self) -> None:
        self._loaded_for = self.app.state.seller_id
        self.initialize()

    def action_noop(self) -> None:
        pass
