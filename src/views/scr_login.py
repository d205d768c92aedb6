from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label

from views.base_screen import BaseScreen
from views.modal_dialog import QuitDialogModal


class LoginScreen(BaseScreen):
    """
    Asks for a seller id and only dismisses once the backend verifies it.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Seller Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical(id="div-login"):
            yield Label("Seller ID")
            yield Input(placeholder="seller id", id="input-login-seller")
            with Horizontal(id="div-login-btns"):
                yield Button("Quit", id="btn-quit")
                yield Button("Login", id="btn-login", variant="primary")

    def on_mount(self):
        self.query_one("#input-login-seller", Input).focus()

    @on(Input.Submitted, "#input-login-seller")
    @on(Button.Pressed, "#btn-login")
    @work(exclusive=True)
    async def handle_login_submit(self) -> None:
        seller_input = self.query_one("#input-login-seller", Input)
        seller_id = seller_input.value.strip()

        if not seller_id:
            self.notify("Seller ID cannot be empty!", severity="error")
            seller_input.focus()
            return

        self.app.state.seller_id = seller_id
        if await self.app.state.verify():
            self.notify(f"Welcome, seller {seller_id}!")
            self.dismiss()
        else:
            self.app.state.end_session()
            self.notify("Seller could not be verified.", severity="error")
            seller_input.value = ""
            seller_input.focus()
            seller_input.add_class("-invalid")

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_(self) -> None:
        self.app.push_screen(QuitDialogModal())
