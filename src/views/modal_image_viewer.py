from typing import Callable, Optional, Sequence

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Button, Input, Label, Static

from utils import config
from utils.gallery import ImageGallery

SUCCESS_TEXT = "Image added successfully!"


class ImageViewerModal(ModalScreen[None]):
    """
    Carousel over a product's image URLs, one at a time.

    The modal never edits the list itself: add/delete go out through the
    callbacks and the owner answers with set_images().
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=True),
        Binding("left", "previous", "Previous", show=True),
        Binding("right", "next", "Next", show=True),
    ]

    def __init__(
        self,
        images: Sequence[str],
        on_close: Callable[[], None],
        on_add_image: Callable[[str], None],
        on_delete_image: Callable[[str], None],
    ) -> None:
        super().__init__()
        self.gallery = ImageGallery(images)
        self.success_message = ""

        self._on_close = on_close
        self._on_add_image = on_add_image
        self._on_delete_image = on_delete_image
        self._success_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        with Vertical(id="div-image-viewer"):
            yield Label("Product Images", id="label-viewer-title")
            with Horizontal(id="hort-image-nav"):
                yield Button("<", id="btn-prev-image")
                yield Static("", id="static-current-image")
                yield Button(">", id="btn-next-image")
            yield Label("", id="label-image-position")
            yield Input(placeholder="Enter image URL", id="input-new-image")
            with Horizontal(id="hort-image-controls"):
                yield Button("Close", id="btn-close-viewer")
                yield Button(
                    "Delete Current Image", id="btn-delete-image", variant="error"
                )
                yield Button("Add Image", id="btn-add-image", variant="primary")
            yield Label("", id="label-image-success")

    def on_mount(self) -> None:
        self.render_gallery()
        self.query_one("#input-new-image", Input).focus()

    def on_unmount(self) -> None:
        if self._success_timer is not None:
            self._success_timer.stop()
            self._success_timer = None

    def set_images(self, images: Sequence[str]) -> None:
        """Take the owner's new list; the position is clamped to fit it."""
        self.gallery.replace(images)
        if self.is_mounted:
            self.render_gallery()

    def render_gallery(self) -> None:
        current = self.gallery.current
        position = self.query_one("#label-image-position", Label)
        if current is None:
            self.query_one("#static-current-image", Static).update(
                "No images available."
            )
            position.update("")
        else:
            # URLs may contain markup characters
            self.query_one("#static-current-image", Static).update(Text(current))
            position.update(f"Image {self.gallery.index + 1} of {len(self.gallery)}")

        self.query_one("#btn-prev-image").display = self.gallery.can_navigate
        self.query_one("#btn-next-image").display = self.gallery.can_navigate
        self.query_one("#btn-delete-image").display = current is not None
        self.query_one("#label-image-success", Label).update(self.success_message)

    @on(Button.Pressed, "#btn-prev-image")
    def action_previous(self) -> None:
        if self.gallery.can_navigate:
            self.gallery.previous()
            self.render_gallery()

    @on(Button.Pressed, "#btn-next-image")
    def action_next(self) -> None:
        if self.gallery.can_navigate:
            self.gallery.next()
            self.render_gallery()

    @on(Input.Submitted, "#input-new-image")
    @on(Button.Pressed, "#btn-add-image")
    def handle_add_image(self) -> None:
        url_input = self.query_one("#input-new-image", Input)
        if url_input.value.strip() == "":
            return

        self._on_add_image(url_input.value)
        url_input.value = ""
        self._show_success(SUCCESS_TEXT)

    @on(Button.Pressed, "#btn-delete-image")
    def handle_delete_image(self) -> None:
        if self.gallery.current is not None:
            self._on_delete_image(self.gallery.current)

    @on(Button.Pressed, "#btn-close-viewer")
    def action_close(self) -> None:
        self._on_close()
        self.dismiss()

    def _show_success(self, text: str) -> None:
        if self._success_timer is not None:
            self._success_timer.stop()
        self.success_message = text
        self.render_gallery()
        self._success_timer = self.set_timer(
            config.SUCCESS_MESSAGE_SECONDS, self._clear_success
        )

    def _clear_success(self) -> None:
        self._success_timer = None
        self.success_message = ""
        self.render_gallery()
