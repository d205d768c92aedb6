from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, MarkdownViewer

from api.models import Order
from utils.pure import format_price, generate_markdown_table


def order_detail_markdown(order: Order) -> str:
    rows = [
        ["Order ID", order.order_id],
        ["Tracking ID", order.tracking_id],
        ["Customer", order.name],
        ["Email", order.email],
        ["Status", order.status],
        ["Date", order.date],
        ["Time", order.time],
        ["Shipping Address", order.address],
        ["Total Price", format_price(order.price)],
    ]
    return "### Order Details\n\n" + generate_markdown_table(
        ["Field", "Value"], rows, ["l", "l"]
    )


class OrderDetailModal(ModalScreen[None]):
    """Read-only view of one order."""

    BINDINGS = [Binding("escape", "close", "Close", show=True)]

    def __init__(self, order: Order) -> None:
        super().__init__()
        self.order = order

    def compose(self) -> ComposeResult:
        with Vertical(id="div-order-detail"):
            yield MarkdownViewer(
                order_detail_markdown(self.order), show_table_of_contents=False
            )
            with Horizontal(id="hort-order-detail-btns"):
                yield Button("Close", id="btn-close-order", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#btn-close-order").focus()

    @on(Button.Pressed, "#btn-close-order")
    def action_close(self) -> None:
        self.dismiss()
