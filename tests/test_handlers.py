"""Tests for the Telegram handlers, driven with mocked updates."""

import asyncio
from decimal import Decimal

import pytest

from conftest import make_callback_update, make_command_update, replies
from storefront.database.database import MemoryKeyValueStore, StorageError
from storefront.handlers import cart_handlers, menu_handlers, order_handlers, product_handlers
from storefront.models.catalog import CATALOG
from storefront.store.cart_store import CartStore
from storefront.utils.constants import CHECKOUT_SUCCESS_MESSAGE


class FailingStorage(MemoryKeyValueStore):
    def set(self, key, value):
        raise StorageError(f"Could not write slot '{key}'")


def run(handler, update, context):
    return asyncio.run(handler(update, context))


class TestAuthorization:
    def test_unauthorized_user_is_rejected(self, authorized, context, store):
        update = make_callback_update("add:0", user_id=1)
        run(product_handlers.add_to_cart, update, context)
        assert store.cart_items == ()
        assert replies(update.effective_message) == ["Sorry, you are not authorized to use this bot."]

    def test_authorized_username(self, authorized, monkeypatch, context, store):
        from storefront.handlers import auth_handlers
        monkeypatch.setattr(auth_handlers, "AUTHORIZED_USERS_USERNAMES", {"@shopper"})
        update = make_callback_update("add:0", user_id=1, username="Shopper")
        run(product_handlers.add_to_cart, update, context)
        assert store.cart_items == (CATALOG[0],)


class TestMenuHandlers:
    def test_start_registers_commands_and_shows_menu(self, authorized, context):
        update = make_command_update()
        run(menu_handlers.start, update, context)
        context.bot.set_my_commands.assert_awaited_once_with(menu_handlers.BOT_COMMANDS)
        markup = update.message.reply_text.await_args.kwargs["reply_markup"]
        assert markup.inline_keyboard[1][0].text == "🛒 Cart (0)"

    def test_menu_callback_answers_query(self, authorized, context):
        update = make_callback_update("menu")
        run(menu_handlers.show_menu, update, context)
        update.callback_query.answer.assert_awaited_once()
        assert "What would you like to do next?" in replies(update.effective_message)[0]

    def test_reset_clears_store(self, authorized, context, store, phone):
        store.add_to_cart(phone)
        store.checkout()
        update = make_command_update()
        run(menu_handlers.command_reset, update, context)
        assert store.order_history == ()
        assert "cleared" in replies(update.message)[0]


class TestProductHandlers:
    def test_show_products_lists_catalog(self, authorized, context):
        update = make_command_update()
        run(product_handlers.show_products, update, context)
        markup = update.message.reply_text.await_args.kwargs["reply_markup"]
        assert len(markup.inline_keyboard) == len(CATALOG) + 1

    def test_detail_without_image_replies_text(self, authorized, context, monkeypatch):
        monkeypatch.setattr(product_handlers, "find_product_image", lambda image: None)
        update = make_callback_update("product:1")
        run(product_handlers.show_product_detail, update, context)
        assert "MacBook Pro" in replies(update.effective_message)[0]
        update.effective_message.reply_photo.assert_not_awaited()

    def test_detail_with_image_replies_photo(self, authorized, context, monkeypatch, tmp_path):
        image = tmp_path / "airpods.png"
        image.write_bytes(b"png")
        monkeypatch.setattr(product_handlers, "find_product_image", lambda name: image)
        update = make_callback_update("product:2")
        run(product_handlers.show_product_detail, update, context)
        kwargs = update.effective_message.reply_photo.await_args.kwargs
        assert "AirPods Pro" in kwargs["caption"]

    def test_detail_for_unknown_product(self, authorized, context):
        update = make_callback_update("product:9")
        run(product_handlers.show_product_detail, update, context)
        assert "not available" in replies(update.effective_message)[0]

    def test_add_to_cart(self, authorized, context, store):
        update = make_callback_update("add:0")
        run(product_handlers.add_to_cart, update, context)
        run(product_handlers.add_to_cart, make_callback_update("add:0"), context)
        assert store.cart_items == (CATALOG[0], CATALOG[0])
        assert "iPhone 14 added to cart" in replies(update.effective_message)[0]

    def test_add_to_cart_storage_failure(self, authorized, context):
        store = CartStore(FailingStorage())
        context.bot_data["store"] = store
        update = make_callback_update("add:1")
        run(product_handlers.add_to_cart, update, context)
        assert store.cart_items == (CATALOG[1],)
        assert "could not be saved" in replies(update.effective_message)[0]


class TestFindProductImage:
    def test_finds_first_matching_extension(self, tmp_path):
        (tmp_path / "iphone.png").write_bytes(b"png")
        assert product_handlers.find_product_image("iphone", str(tmp_path)) == tmp_path / "iphone.png"

    def test_missing_image(self, tmp_path):
        assert product_handlers.find_product_image("iphone", str(tmp_path)) is None


class TestCartHandlers:
    def test_show_cart(self, authorized, context, store, phone):
        store.add_to_cart(phone)
        update = make_command_update()
        run(cart_handlers.show_cart, update, context)
        assert "1. Phone: $10.00" in replies(update.message)[0]

    def test_remove_from_cart(self, authorized, context, store, phone, case):
        store.add_to_cart(phone)
        store.add_to_cart(case)
        update = make_callback_update("remove:0")
        run(cart_handlers.remove_from_cart, update, context)
        assert store.cart_items == (case,)
        assert "1. Case" in replies(update.effective_message)[0]

    def test_remove_stale_position(self, authorized, context, store, phone):
        store.add_to_cart(phone)
        update = make_callback_update("remove:3")
        run(cart_handlers.remove_from_cart, update, context)
        assert store.cart_items == (phone,)
        assert "no longer in your cart" in replies(update.effective_message)[0]

    def test_checkout(self, authorized, context, store, phone, case):
        store.add_to_cart(phone)
        store.add_to_cart(case)
        update = make_callback_update("checkout")
        run(cart_handlers.checkout, update, context)
        assert store.cart_items == ()
        assert store.order_history[0].total_price == Decimal("15")
        assert CHECKOUT_SUCCESS_MESSAGE in replies(update.effective_message)[0]

    def test_checkout_with_empty_cart_is_refused(self, authorized, context, store):
        update = make_callback_update("checkout")
        run(cart_handlers.checkout, update, context)
        assert store.order_history == ()
        assert replies(update.effective_message) == ["⚠️ Cart is empty!"]

    def test_checkout_storage_failure(self, authorized, context, phone):
        store = CartStore(FailingStorage())
        store._cart_items.append(phone)
        context.bot_data["store"] = store
        update = make_callback_update("checkout")
        run(cart_handlers.checkout, update, context)
        assert "Order placed, but it could not be saved" in replies(update.effective_message)[0]
        assert len(store.order_history) == 1
        assert store.cart_items == ()


class TestOrderHandlers:
    def test_show_orders(self, authorized, context, store, phone):
        store.add_to_cart(phone)
        store.checkout()
        update = make_command_update()
        run(order_handlers.show_orders, update, context)
        assert "- Phone" in replies(update.message)[0]

    @pytest.mark.parametrize("update_factory", [make_command_update, lambda: make_callback_update("orders")])
    def test_show_orders_empty(self, authorized, context, update_factory):
        update = update_factory()
        run(order_handlers.show_orders, update, context)
        assert "No orders yet" in replies(update.effective_message)[0]
