from telegram import Message, Update
from telegram.ext import ContextTypes
from ..store.cart_store import CartStore


def get_store(context: ContextTypes.DEFAULT_TYPE) -> CartStore:
    return context.bot_data['store']


async def get_message(update: Update) -> Message:
    """Answer a pending callback query and return the message to reply to."""
    if update.callback_query:
        await update.callback_query.answer()
        return update.callback_query.message
    return update.message


def parse_index(data: str) -> int:
    """Extract the position from callback data such as 'remove:2'."""
    return int(data.split(':', 1)[1])
