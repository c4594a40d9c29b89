from decimal import Decimal
from typing import Tuple
from .models import Product

# Products available in the store, in display order
CATALOG: Tuple[Product, ...] = (
    Product(name='iPhone 14', price=Decimal('999.99'), image='iphone'),
    Product(name='MacBook Pro', price=Decimal('1999.99'), image='macbook'),
    Product(name='AirPods Pro', price=Decimal('399.99'), image='airpods'),
)


def get_product(index: int) -> Product:
    """Return the catalog product at the given position."""
    if not 0 <= index < len(CATALOG):
        raise IndexError(f"No catalog product at position {index}")
    return CATALOG[index]
