import argparse
from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from api.remote import LocalOnlyProductWriter, ProductWriter
from utils import config
from utils.logger import get_logger
from utils.messages import (
    QuitRequestedMessage,
    SellerLogoutMessage,
    SellerRejectedMessage,
)
from utils.state import GlobalState, SellerVerifier
from utils.status import StatusStrategy, get_status_strategy
from views.scr_login import LoginScreen
from views.scr_orders import OrdersScreen
from views.scr_products import ProductsScreen

_logger = get_logger(__name__)


class SellerConsoleApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "products": ProductsScreen,
        "orders": OrdersScreen,
    }

    MODE_TITLES = {"products": "Product Management", "orders": "Order Management"}

    CSS_PATH = [
        "views/styles/index.tcss",
        "views/styles/products.tcss",
        "views/styles/orders.tcss",
        "views/styles/modals.tcss",
    ]

    state: GlobalState

    def __init__(
        self,
        seller_id: Optional[str] = None,
        verifier: Optional[SellerVerifier] = None,
        product_writer: Optional[ProductWriter] = None,
        status_strategy: Optional[StatusStrategy] = None,
    ):
        super().__init__()
        self.state = GlobalState(seller_id=seller_id)
        if verifier is not None:
            self.state.verifier = verifier
        self.product_writer = product_writer or LocalOnlyProductWriter()
        self.status_strategy = status_strategy or get_status_strategy(
            config.ORDER_STATUS_STRATEGY
        )

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(SellerLogoutMessage)
    def handle_seller_logout(self):
        _logger.info(f"Seller {self.state.seller_id} logged out.")
        self.state.end_session()
        self.notify("Logout successful.")
        self.main_flow()

    @on(SellerRejectedMessage)
    def handle_seller_rejected(self, message: SellerRejectedMessage):
        _logger.warning(f"Redirecting to login: {message.reason}")
        self.state.end_session()
        self.notify(message.reason, severity="error")
        self.main_flow()

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.state.end_session()
        self.exit()

    @work(exclusive=True, group="main-flow")
    async def main_flow(self):
        if not await self.state.verify():
            await self.push_screen_wait(LoginScreen())
        await self.switch_mode("products")


def run() -> None:
    parser = argparse.ArgumentParser(description="Seller console for products and orders.")
    parser.add_argument(
        "--seller-id",
        default=config.SELLER_ID,
        help="seller to verify at start-up (default: $SELLER_ID)",
    )
    args = parser.parse_args()

    app = SellerConsoleApp(seller_id=args.seller_id)
    app.run()


if __name__ == "__main__":
    run()
