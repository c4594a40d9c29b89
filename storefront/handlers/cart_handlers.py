import logging
from telegram import Update
from telegram.ext import ContextTypes
from ..database.database import StorageError
from ..utils.constants import EMOJIS
from ..utils.formatters import format_cart_text, format_checkout_confirmation
from ..utils.keyboards import create_cart_keyboard, create_main_menu_keyboard
from .auth_handlers import check_auth
from .helpers import get_message, get_store, parse_index

logger = logging.getLogger(__name__)


async def show_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    cart_items = get_store(context).cart_items
    cart_text, _ = format_cart_text(cart_items)
    await message.reply_text(cart_text, reply_markup=create_cart_keyboard(cart_items))


async def remove_from_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    store = get_store(context)
    try:
        store.remove_from_cart(parse_index(update.callback_query.data))
    except IndexError:
        # Pressed a button from an older rendering of the cart
        await message.reply_text(f"{EMOJIS['WARNING']} That item is no longer in your cart.")
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        await message.reply_text(f"{EMOJIS['WARNING']} The item was removed, but the cart could not be saved.")

    cart_items = store.cart_items
    cart_text, _ = format_cart_text(cart_items)
    await message.reply_text(cart_text, reply_markup=create_cart_keyboard(cart_items))


async def checkout(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    store = get_store(context)
    if not store.cart_items:
        await message.reply_text(f"{EMOJIS['WARNING']} Cart is empty!")
        return

    try:
        order = store.checkout()
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        await message.reply_text(
            f"{EMOJIS['WARNING']} Order placed, but it could not be saved."
        )
        return

    await message.reply_text(format_checkout_confirmation(order))
    await message.reply_text(
        f"{EMOJIS['ARROW']} What would you like to do next?",
        reply_markup=create_main_menu_keyboard(0)
    )
