import logging
from telegram import Update
from telegram.ext import ContextTypes
from ..database.database import StorageError
from ..utils.constants import EMOJIS
from ..utils.keyboards import create_main_menu_keyboard
from .auth_handlers import check_auth
from .helpers import get_message, get_store

logger = logging.getLogger(__name__)

BOT_COMMANDS = [
    ('start', 'Show the main menu'),
    ('products', 'Browse products'),
    ('cart', 'Show your cart'),
    ('orders', 'Show your order history'),
    ('reset', 'Clear the cart and order history'),
]


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    await context.bot.set_my_commands(BOT_COMMANDS)

    store = get_store(context)
    await update.message.reply_text(
        f"{EMOJIS['WAVE']} Welcome to the store!\n"
        f"{EMOJIS['ARROW']} What would you like to do?",
        reply_markup=create_main_menu_keyboard(len(store.cart_items))
    )


async def show_menu(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    store = get_store(context)
    await message.reply_text(
        f"{EMOJIS['ARROW']} What would you like to do next?",
        reply_markup=create_main_menu_keyboard(len(store.cart_items))
    )


async def command_reset(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    store = get_store(context)
    try:
        store.reset()
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        await update.message.reply_text(
            f"{EMOJIS['WARNING']} Cart and orders were cleared, but saving failed. Please try again."
        )
        return

    await update.message.reply_text(
        f"{EMOJIS['CONFIRM']} Cart and order history cleared.",
        reply_markup=create_main_menu_keyboard(0)
    )
