import logging
from pathlib import Path
from typing import Optional
from telegram import Update
from telegram.ext import ContextTypes
from ..database.database import StorageError
from ..models.catalog import CATALOG, get_product
from ..utils.constants import EMOJIS, IMAGES_DIR
from ..utils.formatters import format_products_text, format_product_detail
from ..utils.keyboards import create_product_keyboard, create_product_detail_keyboard, create_main_menu_keyboard
from .auth_handlers import check_auth
from .helpers import get_message, get_store, parse_index

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp')


def find_product_image(image: str, images_dir: str = IMAGES_DIR) -> Optional[Path]:
    """Return the image file for a product's image reference, if one exists."""
    directory = Path(images_dir)
    for extension in IMAGE_EXTENSIONS:
        path = directory / f"{image}{extension}"
        if path.is_file():
            return path
    return None


async def show_products(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    await message.reply_text(format_products_text(), reply_markup=create_product_keyboard(CATALOG))


async def show_product_detail(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    index = parse_index(update.callback_query.data)
    try:
        product = get_product(index)
    except IndexError:
        await message.reply_text(f"{EMOJIS['WARNING']} That product is not available.")
        return

    caption = format_product_detail(product)
    keyboard = create_product_detail_keyboard(index)
    image_path = find_product_image(product.image)
    if image_path:
        with image_path.open('rb') as photo:
            await message.reply_photo(photo=photo, caption=caption, reply_markup=keyboard)
    else:
        await message.reply_text(caption, reply_markup=keyboard)


async def add_to_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not await check_auth(update):
        return

    message = await get_message(update)
    try:
        product = get_product(parse_index(update.callback_query.data))
    except IndexError:
        await message.reply_text(f"{EMOJIS['WARNING']} That product is not available.")
        return

    store = get_store(context)
    try:
        store.add_to_cart(product)
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        await message.reply_text(
            f"{EMOJIS['WARNING']} {product.name} was added, but the cart could not be saved."
        )
        return

    await message.reply_text(
        f"{EMOJIS['CONFIRM']} {product.name} added to cart.",
        reply_markup=create_main_menu_keyboard(len(store.cart_items))
    )
