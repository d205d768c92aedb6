from typing import Dict, Literal, Tuple, override

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from utils.messages import QuitRequestedMessage

Tone = Literal["default", "positive", "warning", "error"]
Variant = Literal["primary", "default", "success", "warning", "error"]


class ConfirmModal(ModalScreen[bool]):
    """
    Yes/No question. Dismisses with True when confirmed, False otherwise
    (including Escape).
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    # tone -> (confirm variant, cancel variant)
    VARIANT_MAP: Dict[str, Tuple[Variant, Variant]] = {
        "default": ("primary", "default"),
        "positive": ("success", "default"),
        "warning": ("warning", "default"),
        "error": ("error", "primary"),
    }

    def __init__(
        self,
        caption: str,
        confirm_text: str = "Yes",
        cancel_text: str = "No",
        tone: Tone = "default",
    ):
        super().__init__()
        self.caption = caption
        self.confirm_text = confirm_text
        self.cancel_text = cancel_text
        self.tone = tone

    def compose(self) -> ComposeResult:
        confirm_variant, cancel_variant = ConfirmModal.VARIANT_MAP[self.tone]
        with Container(id="div-dialog"):
            yield Label(self.caption, id="caption")
            with Horizontal(id="dialog-btns"):
                yield Button(self.cancel_text, variant=cancel_variant, id="btn-cancel")
                yield Button(self.confirm_text, variant=confirm_variant, id="btn-confirm")

    def on_mount(self):
        # destructive questions default to the safe answer
        if self.tone == "error":
            self.query_one("#btn-cancel").focus()
        else:
            self.query_one("#btn-confirm").focus()

    @on(Button.Pressed, "#btn-confirm")
    def handle_confirm(self) -> None:
        self.confirmed()

    @on(Button.Pressed, "#btn-cancel")
    def handle_cancel(self) -> None:
        self.dismiss(False)

    def action_cancel(self) -> None:
        self.dismiss(False)

    def confirmed(self) -> None:
        self.dismiss(True)


class QuitDialogModal(ConfirmModal):
    def __init__(self):
        super().__init__("Are you sure you want to quit?", tone="error")

    @override
    def confirmed(self) -> None:
        self.post_message(QuitRequestedMessage())
        self.dismiss(True)
