import logging
from telegram import Update
from telegram.ext import Application, CommandHandler, CallbackQueryHandler
from storefront.database.database import create_storage
from storefront.store.cart_store import CartStore, StoreEvent
from storefront.utils.constants import BOT_TOKEN, DATABASE_URL, STORAGE_BACKEND, LOG_LEVEL
from storefront.handlers.menu_handlers import start, show_menu, command_reset
from storefront.handlers.product_handlers import show_products, show_product_detail, add_to_cart
from storefront.handlers.cart_handlers import show_cart, remove_from_cart, checkout
from storefront.handlers.order_handlers import show_orders

# Enable logging
logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def log_store_change(event: StoreEvent, store: CartStore) -> None:
    logger.info(
        f"Store {event.value}: {len(store.cart_items)} item(s) in cart, "
        f"{len(store.order_history)} order(s) in history"
    )


def build_store() -> CartStore:
    store = CartStore(create_storage(DATABASE_URL, STORAGE_BACKEND))
    store.load()
    store.subscribe(log_store_change)
    logger.info(f"Loaded {len(store.cart_items)} cart item(s) and {len(store.order_history)} order(s)")
    return store


def build_application(store: CartStore, token: str) -> Application:
    application = Application.builder().token(token).build()
    application.bot_data['store'] = store

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("products", show_products))
    application.add_handler(CommandHandler("cart", show_cart))
    application.add_handler(CommandHandler("orders", show_orders))
    application.add_handler(CommandHandler("reset", command_reset))

    application.add_handler(CallbackQueryHandler(show_menu, pattern='^menu$'))
    application.add_handler(CallbackQueryHandler(show_products, pattern='^products$'))
    application.add_handler(CallbackQueryHandler(show_product_detail, pattern=r'^product:\d+$'))
    application.add_handler(CallbackQueryHandler(add_to_cart, pattern=r'^add:\d+$'))
    application.add_handler(CallbackQueryHandler(show_cart, pattern='^cart$'))
    application.add_handler(CallbackQueryHandler(remove_from_cart, pattern=r'^remove:\d+$'))
    application.add_handler(CallbackQueryHandler(checkout, pattern='^checkout$'))
    application.add_handler(CallbackQueryHandler(show_orders, pattern='^orders$'))
    return application


def main():
    if not BOT_TOKEN:
        raise ValueError("BOT_TOKEN environment variable is not set")

    application = build_application(build_store(), BOT_TOKEN)

    # Start the bot
    logger.info("Starting bot...")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()
