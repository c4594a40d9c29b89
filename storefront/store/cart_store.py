import json
import logging
from decimal import InvalidOperation
from enum import Enum
from typing import Callable, List, Tuple
from ..database.database import KeyValueStore
from ..models.models import Product, Order

logger = logging.getLogger(__name__)

CART_KEY = 'cart'
ORDERS_KEY = 'orders'


class StoreEvent(Enum):
    CART_CHANGED = 'cart_changed'
    ORDER_PLACED = 'order_placed'
    RESET = 'reset'


Listener = Callable[[StoreEvent, 'CartStore'], None]


class CartStore:
    """Active cart and order history, persisted to two key-value slots.

    Every mutation updates memory first, then writes the affected slots, then
    notifies subscribers. A failed write raises StorageError but the in-memory
    collections are already in their new, consistent state.
    """

    def __init__(self, storage: KeyValueStore):
        self.storage = storage
        self._cart_items: List[Product] = []
        self._order_history: List[Order] = []
        self._listeners: List[Listener] = []

    @property
    def cart_items(self) -> Tuple[Product, ...]:
        return tuple(self._cart_items)

    @property
    def order_history(self) -> Tuple[Order, ...]:
        return tuple(self._order_history)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self) -> None:
        self.load_cart()
        self.load_orders()

    def load_cart(self) -> None:
        self._cart_items = self._load_slot(CART_KEY, Product.from_dict)

    def load_orders(self) -> None:
        self._order_history = self._load_slot(ORDERS_KEY, Order.from_dict)

    def save_cart(self) -> None:
        self.storage.set(CART_KEY, json.dumps([p.to_dict() for p in self._cart_items]))

    def save_orders(self) -> None:
        self.storage.set(ORDERS_KEY, json.dumps([o.to_dict() for o in self._order_history]))

    def add_to_cart(self, product: Product) -> None:
        self._cart_items.append(product)
        self._commit(StoreEvent.CART_CHANGED, self.save_cart)

    def remove_from_cart(self, index: int) -> Product:
        if not 0 <= index < len(self._cart_items):
            raise IndexError(f"Cart has no item at position {index}")
        product = self._cart_items.pop(index)
        self._commit(StoreEvent.CART_CHANGED, self.save_cart)
        return product

    def checkout(self) -> Order:
        # An empty cart still produces an order, with no products and a zero total
        order = Order.create(self._cart_items)
        self._order_history.append(order)
        self._cart_items = []
        # The orders slot must be written before the cart slot is emptied
        self._commit(StoreEvent.ORDER_PLACED, self.save_orders, self.save_cart)
        return order

    def reset(self) -> None:
        self._cart_items = []
        self._order_history = []
        self._commit(StoreEvent.RESET, self.save_cart, self.save_orders)

    def _commit(self, event: StoreEvent, *savers: Callable[[], None]) -> None:
        try:
            for save in savers:
                save()
        finally:
            for listener in list(self._listeners):
                try:
                    listener(event, self)
                except Exception:
                    logger.exception(f"Store listener failed on {event.value}")

    def _load_slot(self, key: str, decode: Callable) -> list:
        raw = self.storage.get(key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError(f"expected a list, got {type(items).__name__}")
            return [decode(item) for item in items]
        except (ValueError, TypeError, KeyError, InvalidOperation) as e:
            logger.warning(f"Ignoring malformed '{key}' slot: {e}")
            return []
