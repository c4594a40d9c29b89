from typing import Sequence
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..models.models import Product
from .constants import EMOJIS
from .formatters import format_price


def create_product_keyboard(products: Sequence[Product]) -> InlineKeyboardMarkup:
    """Create a keyboard with a details button and an add button per product."""
    keyboard = [
        [
            InlineKeyboardButton(
                f"{EMOJIS['PRODUCT']} {product.name} - {format_price(product.price)}",
                callback_data=f'product:{index}'
            ),
            InlineKeyboardButton(f"{EMOJIS['PLUS']} Add to Cart", callback_data=f'add:{index}'),
        ]
        for index, product in enumerate(products)
    ]
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['BACK']} Menu", callback_data='menu')])
    return InlineKeyboardMarkup(keyboard)


def create_product_detail_keyboard(index: int) -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['PLUS']} Add to Cart", callback_data=f'add:{index}')],
        [InlineKeyboardButton(f"{EMOJIS['BACK']} Products", callback_data='products')],
    ]
    return InlineKeyboardMarkup(keyboard)


def create_cart_keyboard(cart_items: Sequence[Product]) -> InlineKeyboardMarkup:
    """Create a keyboard with a remove button per cart position and a checkout button."""
    keyboard = [
        [InlineKeyboardButton(
            f"{EMOJIS['REMOVE']} {position + 1}. {product.name}",
            callback_data=f'remove:{position}'
        )]
        for position, product in enumerate(cart_items)
    ]
    if cart_items:
        keyboard.append([InlineKeyboardButton(f"{EMOJIS['CONFIRM']} Checkout", callback_data='checkout')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['BACK']} Menu", callback_data='menu')])
    return InlineKeyboardMarkup(keyboard)


def create_main_menu_keyboard(cart_count: int) -> InlineKeyboardMarkup:
    """Create the main menu keyboard."""
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['SHOPPING']} Products", callback_data='products')],
        [InlineKeyboardButton(f"{EMOJIS['CART']} Cart ({cart_count})", callback_data='cart')],
        [InlineKeyboardButton(f"{EMOJIS['ORDERS']} Orders", callback_data='orders')],
    ]
    return InlineKeyboardMarkup(keyboard)
