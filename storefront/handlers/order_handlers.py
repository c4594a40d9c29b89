from telegram import Update
from telegram.ext import ContextTypes
from ..utils.formatters import format_order_history
from ..utils.keyboards import create_main_menu_keyboard
from .auth_handlers import check_auth
from .helpers import get_message, get_store


async def show_orders(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    store = get_store(context)
    await message.reply_text(
        format_order_history(store.order_history),
        reply_markup=create_main_menu_keyboard(len(store.cart_items))
    )
