from decimal import Decimal
from typing import Sequence, Tuple
from ..models.models import Product, Order
from .constants import EMOJIS, CHECKOUT_SUCCESS_MESSAGE


def format_price(price: Decimal) -> str:
    return f"${price:.2f}"


def format_order_date(order: Order) -> str:
    """Short numeric date, e.g. 3/13/25."""
    date = order.date
    return f"{date.month}/{date.day}/{date.strftime('%y')}"


def format_products_text() -> str:
    return f"{EMOJIS['SHOPPING']} Products:\n{EMOJIS['ARROW']} Tap a product for details or add it to your cart."


def format_product_detail(product: Product) -> str:
    return f"{EMOJIS['PRODUCT']} {product.name}\n{EMOJIS['MONEY']} {format_price(product.price)}"


def format_cart_text(cart_items: Sequence[Product]) -> Tuple[str, Decimal]:
    """Format cart contents and calculate total."""
    if not cart_items:
        return f"{EMOJIS['CART']} Cart is empty.", Decimal('0')

    total = sum((product.price for product in cart_items), Decimal('0'))
    cart_lines = [
        f"{position}. {product.name}: {format_price(product.price)}"
        for position, product in enumerate(cart_items, start=1)
    ]

    cart_text = f"{EMOJIS['CART']} Cart:\n" + "\n".join(cart_lines)
    cart_text += f"\n\n{EMOJIS['MONEY']} Total: {format_price(total)}"
    return cart_text, total


def format_order(order: Order) -> str:
    lines = [
        f"{EMOJIS['PACKAGE']} Order Date: {format_order_date(order)}",
        f"{EMOJIS['MONEY']} Total: {format_price(order.total_price)}",
    ]
    lines.extend(f"- {product.name}" for product in order.products)
    return "\n".join(lines)


def format_checkout_confirmation(order: Order) -> str:
    """Format order confirmation message."""
    return f"{EMOJIS['CONFIRM']} {CHECKOUT_SUCCESS_MESSAGE}\n\n{format_order(order)}"


def format_order_history(orders: Sequence[Order]) -> str:
    if not orders:
        return f"{EMOJIS['ORDERS']} No orders yet."
    return f"{EMOJIS['ORDERS']} Order History:\n\n" + "\n\n".join(format_order(order) for order in orders)
