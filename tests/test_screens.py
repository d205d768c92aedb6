import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from textual.app import App
from textual.widgets import Button, DataTable, Input

from api.client import ApiError
from api.models import Order, Product
from main import SellerConsoleApp
from utils.status import constant_status
from views.modal_image_viewer import SUCCESS_TEXT, ImageViewerModal
from views.modal_order_detail import OrderDetailModal, order_detail_markdown
from views.scr_login import LoginScreen
from views.scr_orders import OrdersScreen
from views.scr_products import ProductsScreen

PRODUCTS = [
    Product("p1", "Red Mug", 12.5, ("u1", "u2"), ("kitchen",), 4, 9, "public"),
    Product("p2", "Blue Plate", 3.0, ("v1",), ("kitchen",), 1, 0, "hidden"),
]

ORDERS = [
    Order("A2", "T2", "bob", "bob@example.com", "2 Side St", 50.0, "2024-01-02", "11:00"),
    Order("A1", "T1", "alice", "alice@example.com", "1 Main St", 20.0, "2024-01-01", "10:00"),
]


async def settle(pilot, rounds: int = 5) -> None:
    """Let screen workers finish and the message queue drain."""
    app = pilot.app
    for _ in range(rounds):
        await pilot.pause()
        pending = [w for w in app.workers if w.node is not app and not w.is_finished]
        if pending:
            await app.workers.wait_for_complete(pending)


def make_writer() -> MagicMock:
    writer = MagicMock()
    writer.save_product = AsyncMock(return_value=False)
    writer.add_image = AsyncMock(return_value=False)
    writer.delete_image = AsyncMock(return_value=False)
    return writer


class ViewerHarness(App):
    def __init__(self, images):
        super().__init__()
        self.image_list = list(images)
        self.added_urls = []
        self.deleted_urls = []
        self.close_count = 0
        self.viewer = None

    def on_mount(self) -> None:
        self.viewer = ImageViewerModal(
            self.image_list,
            on_close=self.handle_close,
            on_add_image=self.handle_add,
            on_delete_image=self.handle_delete,
        )
        self.push_screen(self.viewer)

    def handle_close(self):
        self.close_count += 1

    def handle_add(self, url):
        self.added_urls.append(url)
        self.image_list = self.image_list + [url]
        self.viewer.set_images(self.image_list)

    def handle_delete(self, url):
        self.deleted_urls.append(url)
        self.image_list = [i for i in self.image_list if i != url]
        self.viewer.set_images(self.image_list)


class ImageViewerModalTestCase(unittest.IsolatedAsyncioTestCase):
    async def test_navigation_wraps(self):
        app = ViewerHarness(["u1", "u2", "u3"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            self.assertEqual(viewer.gallery.current, "u1")

            viewer.query_one("#btn-prev-image", Button).press()
            await pilot.pause()
            self.assertEqual(viewer.gallery.index, 2)
            self.assertEqual(viewer.gallery.current, "u3")

            viewer.query_one("#btn-next-image", Button).press()
            await pilot.pause()
            self.assertEqual(viewer.gallery.index, 0)

    async def test_navigation_hidden_for_single_image(self):
        app = ViewerHarness(["u1"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            self.assertFalse(viewer.query_one("#btn-prev-image").display)
            self.assertFalse(viewer.query_one("#btn-next-image").display)
            self.assertTrue(viewer.query_one("#btn-delete-image").display)

    async def test_blank_url_is_ignored(self):
        app = ViewerHarness(["u1"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            viewer.query_one("#input-new-image", Input).value = "   "
            viewer.query_one("#btn-add-image", Button).press()
            await pilot.pause()

            self.assertEqual(app.added_urls, [])
            self.assertEqual(len(viewer.gallery), 1)
            self.assertEqual(viewer.success_message, "")

    async def test_add_image(self):
        app = ViewerHarness(["u1"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            url_input = viewer.query_one("#input-new-image", Input)
            url_input.value = "http://img/u2.png"
            viewer.query_one("#btn-add-image", Button).press()
            await pilot.pause()

            self.assertEqual(app.added_urls, ["http://img/u2.png"])
            self.assertEqual(url_input.value, "")
            self.assertEqual(viewer.success_message, SUCCESS_TEXT)
            self.assertEqual(len(viewer.gallery), 2)
            self.assertTrue(viewer.query_one("#btn-next-image").display)

    async def test_success_message_clears(self):
        app = ViewerHarness([])
        with patch("utils.config.SUCCESS_MESSAGE_SECONDS", 0.05):
            async with app.run_test() as pilot:
                await pilot.pause()
                viewer = app.viewer
                viewer.query_one("#input-new-image", Input).value = "u9"
                viewer.query_one("#btn-add-image", Button).press()
                await pilot.pause()
                self.assertEqual(viewer.success_message, SUCCESS_TEXT)

                await pilot.pause(0.3)
                self.assertEqual(viewer.success_message, "")

    async def test_closing_stops_success_timer(self):
        app = ViewerHarness(["u1"])
        with patch("utils.config.SUCCESS_MESSAGE_SECONDS", 0.2):
            async with app.run_test() as pilot:
                await pilot.pause()
                viewer = app.viewer
                viewer.query_one("#input-new-image", Input).value = "u2"
                viewer.query_one("#btn-add-image", Button).press()
                await pilot.pause()
                self.assertIsNotNone(viewer._success_timer)

                viewer.query_one("#btn-close-viewer", Button).press()
                await pilot.pause(0.5)
                self.assertIsNone(viewer._success_timer)
                # the clear callback never ran against the closed modal
                self.assertEqual(viewer.success_message, SUCCESS_TEXT)
                self.assertNotIsInstance(app.screen, ImageViewerModal)

    async def test_delete_only_image_shows_placeholder(self):
        app = ViewerHarness(["u1"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            viewer.query_one("#btn-delete-image", Button).press()
            await pilot.pause()

            self.assertEqual(app.deleted_urls, ["u1"])
            self.assertIsNone(viewer.gallery.current)
            self.assertFalse(viewer.query_one("#btn-delete-image").display)

    async def test_delete_last_image_clamps_position(self):
        app = ViewerHarness(["u1", "u2", "u3"])
        async with app.run_test() as pilot:
            await pilot.pause()
            viewer = app.viewer
            viewer.query_one("#btn-prev-image", Button).press()
            await pilot.pause()
            viewer.query_one("#btn-delete-image", Button).press()
            await pilot.pause()

            self.assertEqual(app.deleted_urls, ["u3"])
            self.assertEqual(viewer.gallery.current, "u2")

    async def test_close_calls_back_and_dismisses(self):
        app = ViewerHarness(["u1"])
        async with app.run_test() as pilot:
            await pilot.pause()
            app.viewer.query_one("#btn-close-viewer", Button).press()
            await pilot.pause()

            self.assertEqual(app.close_count, 1)
            self.assertNotIsInstance(app.screen, ImageViewerModal)


class ProductsScreenTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.get_products = AsyncMock(return_value=list(PRODUCTS))
        patcher = patch("api.remote.get_products", self.get_products)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.writer = make_writer()
        self.app = SellerConsoleApp(
            seller_id="s1",
            verifier=AsyncMock(return_value=True),
            product_writer=self.writer,
        )

    async def test_starts_on_products_with_fetched_list(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            self.assertIsInstance(screen, ProductsScreen)
            self.assertEqual(screen.products, PRODUCTS)
            self.get_products.assert_awaited_once()
            # row bindings work without tabbing away from the search box
            self.assertIsInstance(self.app.focused, DataTable)

    async def test_search_filters_rows(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            screen.query_one("#input-search", Input).value = "plate"
            await pilot.pause()
            self.assertEqual([p.product_id for p in screen.visible_products], ["p2"])

    async def test_edit_is_local_until_reload(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen

            screen.begin_edit("p1")
            await pilot.pause()
            screen.query_one("#input-edit-price", Input).value = "99.5"
            await pilot.pause()
            self.assertEqual(screen.draft.price, "99.5")
            # staging copy only
            self.assertEqual(screen.products[0].product_price, 12.5)

            await screen.save_edit().wait()
            await pilot.pause()
            self.assertIsNone(screen.draft)
            self.assertEqual(screen.products[0].product_price, 99.5)
            self.assertEqual(screen.products[1], PRODUCTS[1])
            self.writer.save_product.assert_awaited_once_with(screen.products[0])

            await screen.load_products().wait()
            await pilot.pause()
            self.assertEqual(screen.products[0].product_price, 12.5)

    async def test_switching_rows_drops_draft(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            screen.begin_edit("p1")
            await pilot.pause()
            screen.query_one("#input-edit-name", Input).value = "Changed"
            await pilot.pause()

            screen.begin_edit("p2")
            await pilot.pause()
            self.assertEqual(screen.draft.product_id, "p2")
            self.assertEqual(screen.products[0].product_name, "Red Mug")

    async def test_invalid_price_keeps_edit_mode(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            screen.begin_edit("p1")
            await pilot.pause()
            screen.draft.set_field("price", "cheap")

            await screen.save_edit().wait()
            self.assertIsNotNone(screen.draft)
            self.assertEqual(screen.products, PRODUCTS)
            self.writer.save_product.assert_not_awaited()

    async def test_image_changes_reach_product_and_viewer(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            screen.open_image_viewer("p1")
            await pilot.pause()
            viewer = self.app.screen
            self.assertIsInstance(viewer, ImageViewerModal)

            screen.handle_add_image("u3")
            await settle(pilot)
            self.assertEqual(screen.products[0].img, ("u1", "u2", "u3"))
            self.assertEqual(viewer.gallery.images, ("u1", "u2", "u3"))
            self.writer.add_image.assert_awaited_once_with("p1", "u3")

            screen.handle_delete_image("u1")
            await settle(pilot)
            self.assertEqual(screen.products[0].img, ("u2", "u3"))
            self.assertEqual(viewer.gallery.images, ("u2", "u3"))
            self.writer.delete_image.assert_awaited_once_with("p1", "u1")
            # other product untouched
            self.assertEqual(screen.products[1].img, ("v1",))

    async def test_image_changes_without_selection_are_noops(self):
        async with self.app.run_test() as pilot:
            await settle(pilot)
            screen = self.app.screen
            screen.handle_add_image("u9")
            await settle(pilot)
            self.assertEqual(screen.products, PRODUCTS)
            self.writer.add_image.assert_not_awaited()

    async def test_fetch_failure_leaves_list_empty(self):
        self.get_products.side_effect = ApiError("down")
        async with self.app.run_test() as pilot:
            await settle(pilot)
            self.assertEqual(self.app.screen.products, [])


class OrdersScreenTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.get_orders = AsyncMock(return_value=list(ORDERS))
        for target, value in (
            ("api.remote.get_products", AsyncMock(return_value=[])),
            ("api.remote.get_orders", self.get_orders),
        ):
            patcher = patch(target, value)
            patcher.start()
            self.addCleanup(patcher.stop)

    def make_app(self, verifier) -> SellerConsoleApp:
        return SellerConsoleApp(
            seller_id="s1",
            verifier=verifier,
            product_writer=make_writer(),
            status_strategy=constant_status("Shipped"),
        )

    async def open_orders(self, app, pilot) -> OrdersScreen:
        await settle(pilot)
        await app.switch_mode("orders")
        await settle(pilot)
        return app.screen

    async def test_fetches_after_verification(self):
        verifier = AsyncMock(return_value=True)
        app = self.make_app(verifier)
        async with app.run_test() as pilot:
            screen = await self.open_orders(app, pilot)
            self.assertIsInstance(screen, OrdersScreen)
            self.assertEqual([o.order_id for o in screen.displayed_orders], ["A2", "A1"])
            self.assertTrue(all(o.status == "Shipped" for o in screen.orders))
            verifier.assert_awaited_with("s1")
            self.get_orders.assert_awaited_once()

    async def test_sort_and_search(self):
        app = self.make_app(AsyncMock(return_value=True))
        async with app.run_test() as pilot:
            screen = await self.open_orders(app, pilot)

            screen.sort_by("order_id")
            self.assertEqual([o.order_id for o in screen.displayed_orders], ["A1", "A2"])

            screen.set_query("ali")
            self.assertEqual([o.name for o in screen.displayed_orders], ["alice"])
            # searching never reorders or drops from the sorted list
            self.assertEqual([o.order_id for o in screen.sorted_orders], ["A1", "A2"])

            screen.set_query("")
            screen.sort_by("price")
            self.assertEqual([o.price for o in screen.displayed_orders], [20.0, 50.0])

            screen.sort_by("not_a_column")
            self.assertEqual(screen.sort_key, "price")

    async def test_view_and_close_detail(self):
        app = self.make_app(AsyncMock(return_value=True))
        async with app.run_test() as pilot:
            screen = await self.open_orders(app, pilot)
            screen.view_order("A1")
            await pilot.pause()
            self.assertIsInstance(app.screen, OrderDetailModal)
            self.assertEqual(screen.selected_order.order_id, "A1")

            app.screen.query_one("#btn-close-order", Button).press()
            await settle(pilot)
            self.assertIs(app.screen, screen)
            self.assertIsNone(screen.selected_order)
            # closing the modal must not trigger a refetch
            self.get_orders.assert_awaited_once()

    async def test_rejected_seller_never_sees_orders(self):
        verifier = AsyncMock(side_effect=[True, False])
        app = self.make_app(verifier)
        async with app.run_test() as pilot:
            await settle(pilot)
            await app.switch_mode("orders")
            await settle(pilot)

            self.assertIsInstance(app.screen, LoginScreen)
            self.assertIsNone(app.state.seller_id)
            self.get_orders.assert_not_awaited()


class StartupTestCase(unittest.IsolatedAsyncioTestCase):
    async def test_without_seller_id_shows_login(self):
        verifier = AsyncMock(return_value=True)
        with patch("api.remote.get_products", AsyncMock(return_value=[])):
            app = SellerConsoleApp(verifier=verifier, product_writer=make_writer())
            async with app.run_test() as pilot:
                await settle(pilot)
                self.assertIsInstance(app.screen, LoginScreen)
                verifier.assert_not_awaited()

                app.screen.query_one("#input-login-seller", Input).value = "s7"
                app.screen.query_one("#btn-login", Button).press()
                await settle(pilot)

                verifier.assert_awaited_once_with("s7")
                self.assertEqual(app.state.seller_id, "s7")
                self.assertIsInstance(app.screen, ProductsScreen)


class OrderDetailMarkdownTestCase(unittest.TestCase):
    def test_lists_every_field(self):
        md = order_detail_markdown(ORDERS[1])
        for text in ("A1", "T1", "alice", "alice@example.com", "1 Main St", "Rs.20.00", "10:00"):
            self.assertIn(text, md)
