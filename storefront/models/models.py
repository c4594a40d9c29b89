import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Tuple


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal
    image: str
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        # Accept ints, floats and strings but always store a Decimal
        if isinstance(self.price, bool):
            raise ValueError(f"Product price must be a number, got {self.price!r}")
        if not isinstance(self.price, Decimal):
            try:
                object.__setattr__(self, 'price', Decimal(str(self.price)))
            except InvalidOperation:
                raise ValueError(f"Product price must be a number, got {self.price!r}") from None
        if not self.price.is_finite():
            raise ValueError(f"Product price must be finite, got {self.price}")
        if self.price < 0:
            raise ValueError(f"Product price must be non-negative, got {self.price}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'price': str(self.price),
            'image': self.image,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            price=Decimal(str(data['price'])),
            image=str(data['image']),
        )


@dataclass(frozen=True)
class Order:
    products: Tuple[Product, ...]
    total_price: Decimal
    date: datetime
    id: str = field(default_factory=_new_id)

    @classmethod
    def create(cls, products: Iterable[Product], date: Optional[datetime] = None) -> 'Order':
        """Snapshot products into a new order whose total is the sum of their prices."""
        products = tuple(products)
        total_price = sum((product.price for product in products), Decimal('0'))
        return cls(
            products=products,
            total_price=total_price,
            date=date or datetime.now(timezone.utc),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'products': [product.to_dict() for product in self.products],
            'total_price': str(self.total_price),
            'date': self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        return cls(
            id=str(data['id']),
            products=tuple(Product.from_dict(item) for item in data['products']),
            total_price=Decimal(str(data['total_price'])),
            date=datetime.fromisoformat(data['date']),
        )
