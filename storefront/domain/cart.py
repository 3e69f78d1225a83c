# storefront/domain/cart.py
import json
from typing import List, Optional

from storefront.domain.schemas import MAX_INT, CartLine, CartTotals, OrderItem


class Cart:
    """
    Working set of lines for one browsing session.
    Lines are keyed by (product_id, size); size None is its own key.
    Totals are recomputed on every read.
    """

    def __init__(self, items: Optional[List[CartLine]] = None):
        self.items: List[CartLine] = [i.model_copy() for i in (items or [])]

    def _index(self, product_id: str, size: Optional[str]) -> int | None:
        for idx, line in enumerate(self.items):
            if line.product_id == product_id and line.size == size:
                return idx
        return None

    def add(self, item: CartLine) -> None:
        idx = self._index(item.product_id, item.size)
        if idx is None:
            self.items.append(item.model_copy())
            return
        existing = self.items[idx]
        quantity = min(existing.quantity + item.quantity, MAX_INT)
        self.items[idx] = existing.model_copy(update={"quantity": quantity})

    def remove(self, product_id: str, size: Optional[str] = None) -> None:
        self.items = [
            line for line in self.items
            if not (line.product_id == product_id and line.size == size)
        ]

    def set_quantity(self, product_id: str, size: Optional[str], quantity: int) -> None:
        if quantity <= 0:
            self.remove(product_id, size)
            return
        idx = self._index(product_id, size)
        if idx is not None:
            self.items[idx] = self.items[idx].model_copy(update={"quantity": quantity})

    def clear(self) -> None:
        self.items = []

    def totals(self) -> CartTotals:
        return CartTotals(
            count=sum(line.quantity for line in self.items),
            subtotal=sum(line.price * line.quantity for line in self.items),
        )

    def is_empty(self) -> bool:
        return not self.items

    def to_order_items(self) -> List[OrderItem]:
        return [
            OrderItem(
                product_id=line.product_id,
                name=line.name or line.product_id,
                slug=line.slug,
                size=line.size,
                quantity=line.quantity,
                price=line.price,
                image=line.image,
            )
            for line in self.items
        ]

    def to_json(self) -> str:
        return json.dumps(
            {"items": [line.model_dump(by_alias=True) for line in self.items]}
        )

    @classmethod
    def from_json(cls, raw: str) -> "Cart":
        """Raises ValueError (incl. pydantic's) when the payload is not a cart."""
        data = json.loads(raw)
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ValueError("cart payload must be an object with an items list")
        return cls([CartLine.model_validate(i) for i in data["items"]])
