"""Shopping cart kept as a JSON document of line items.

A cart is stored whole under one key, the same way the storefront keeps it
in browser storage. Quantities are clamped to 1-99, the cart holds at most
50 lines and image URLs are shortened to keep the document small.
"""
import json
import logging

from pydantic import ValidationError

from storefront.schemas.cart import CartLine

logger = logging.getLogger(__name__)

MAX_QUANTITY = 99
MAX_LINES = 50
MAX_IMAGE_LENGTH = 100


class Cart:
    def __init__(self, items: list[CartLine] | None = None):
        self.items: list[CartLine] = list(items or [])
        self.notices: list[str] = []

    @classmethod
    def from_json(cls, raw: str | None) -> "Cart":
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
            items = [CartLine.model_validate(line) for line in data]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error("Discarding unreadable cart data: %s", e)
            return cls()
        return cls(items)

    def to_json(self) -> str:
        self._compact()
        return json.dumps([line.model_dump() for line in self.items], ensure_ascii=False)

    def find(self, product_id: int) -> CartLine | None:
        return next((line for line in self.items if line.id == product_id), None)

    def add(self, product_id: int, name: str, price: float, image: str | None = None, quantity: int = 1) -> CartLine:
        line = self.find(product_id)
        if line:
            line.quantity += quantity
        else:
            line = CartLine(id=product_id, name=name, price=price, image=image, quantity=1)
            line.quantity = quantity
            self.items.append(line)
        self._clamp(line)
        return line

    def change_quantity(self, product_id: int, change: int) -> bool:
        line = self.find(product_id)
        if not line:
            return False
        line.quantity += change
        if line.quantity < 1:
            self.remove(product_id)
        else:
            self._clamp(line)
        return True

    def remove(self, product_id: int) -> bool:
        before = len(self.items)
        self.items = [line for line in self.items if line.id != product_id]
        return len(self.items) < before

    def clear(self) -> None:
        self.items = []

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def total(self) -> float:
        return sum(line.price * line.quantity for line in self.items)

    def _clamp(self, line: CartLine) -> None:
        if line.quantity > MAX_QUANTITY:
            line.quantity = MAX_QUANTITY
            self.notices.append(f"Maximum quantity per product is {MAX_QUANTITY}")

    def _compact(self) -> None:
        if len(self.items) > MAX_LINES:
            self.items = self.items[:MAX_LINES]
            self.notices.append(f"Cart is limited to {MAX_LINES} items")
        for line in self.items:
            if line.image and len(line.image) > MAX_IMAGE_LENGTH:
                line.image = line.image[:MAX_IMAGE_LENGTH]
