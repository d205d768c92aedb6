from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from utils.messages import SellerLogoutMessage
from utils.pure import generate_markdown_table
from views.modal_dialog import ConfirmModal, QuitDialogModal


class Sidebar(Container):
    def compose(self) -> ComposeResult:
        yield Label("Seller", id="label-info-1")
        yield Markdown("", id="md-sellerinfo")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(
            *[
                ListItem(Label(title), id="list-menu-item-" + mode)
                for mode, title in self.app.MODE_TITLES.items()
            ],
            id="list-menu",
        )

    async def on_mount(self):
        await self.refresh_info()

    async def refresh_info(self) -> None:
        state = self.app.state
        rows = [
            ["Seller ID", state.seller_id or "-"],
            ["Status", "Verified" if state.verified else "Not verified"],
        ]
        await self.query_one(Markdown).update(
            generate_markdown_table(None, rows, ["l", "l"])
        )
        self.highlight_item(self.app.current_mode)

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.id.removeprefix("list-menu-item-")
        if self.app.current_mode != selected_mode:
            await self.app.switch_mode(selected_mode)

    @on(Button.Pressed, "#btn-logout")
    @work
    async def handle_logout(self):
        if not await self.app.push_screen_wait(
            ConfirmModal("Are you sure you want to log out?", tone="warning")
        ):
            return

        self.post_message(SellerLogoutMessage())

    def highlight_item(self, mode: str):
        for item in self.query_one("#list-menu", ListView).children:
            item.highlighted = item.id == "list-menu-item-" + mode


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()

        self.configure()

    def configure(
        self,
        header_sub_title: str = "",
        show_sidebar: bool = True,
    ) -> None:
        self.app.title = "Seller Console"
        self.sub_title = header_sub_title
        for mode, title in self.app.MODE_TITLES.items():
            if isinstance(self, self.app.MODES[mode]):
                self.sub_title = title

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    async def refresh_sidebar(self) -> None:
        for sidebar in self.query(Sidebar):
            if sidebar.is_mounted:
                await sidebar.refresh_info()

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
