"""In-memory cart store shared by every consumer of a client session.

The store owns the ordered list of line items and is their only mutator.
Mutations never raise: acting on an unknown id is a no-op and a quantity of
zero or less removes the line item. Derived views (totals, vendor grouping)
are recomputed from the line items on every read.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from apps.common import get_logger

logger = get_logger(__name__).bind(component="carts", layer="store")


class InvalidCartEntryError(ValueError):
    """Raised when an add-to-cart request is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def to_price(value: Any) -> Decimal:
    """Coerce a numeric or string price into a non-negative finite Decimal."""
    if isinstance(value, bool):
        raise InvalidCartEntryError("price must be a number", field="price")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidCartEntryError("price must be finite", field="price")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidCartEntryError("price must be a number", field="price") from exc
    if not price.is_finite():
        raise InvalidCartEntryError("price must be finite", field="price")
    if price < 0:
        raise InvalidCartEntryError("price must not be negative", field="price")
    return price


@dataclass(frozen=True)
class CartEntry:
    id: str
    name: str
    price: Decimal
    vendor_id: str
    vendor_name: str
    image_url: Optional[str] = None
    description: Optional[str] = None
    entity_type: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidCartEntryError("id is required", field="id")
        if not isinstance(self.vendor_id, str) or not self.vendor_id.strip():
            raise InvalidCartEntryError("vendor_id is required", field="vendor_id")
        object.__setattr__(self, "price", to_price(self.price))
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "vendor_name", self.vendor_name or "")


@dataclass(frozen=True)
class CartLineItem:
    id: str
    name: str
    price: Decimal
    vendor_id: str
    vendor_name: str
    quantity: int
    image_url: Optional[str] = None
    description: Optional[str] = None
    entity_type: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: CartEntry, quantity: int = 1) -> "CartLineItem":
        return cls(
            id=entry.id,
            name=entry.name,
            price=entry.price,
            vendor_id=entry.vendor_id,
            vendor_name=entry.vendor_name,
            quantity=quantity,
            image_url=entry.image_url,
            description=entry.description,
            entity_type=entry.entity_type,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartStore:
    def __init__(self):
        self._items: List[CartLineItem] = []
        self._version = 0
        self.logger = logger.bind(store=id(self))

    # Read-only views

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def cart_items(self) -> Tuple[CartLineItem, ...]:
        return self.items

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._items)

    def _index_of(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    # Mutations

    def add_to_cart(self, entry: CartEntry) -> CartLineItem:
        """Add one unit of ``entry``; repeated ids increase the stored quantity."""
        index = self._index_of(entry.id)
        if index is None:
            item = CartLineItem.from_entry(entry)
            self._items.append(item)
            self.logger.debug(
                "Line item added",
                item_id=entry.id,
                vendor_id=entry.vendor_id,
            )
        else:
            current = self._items[index]
            item = replace(current, quantity=current.quantity + 1)
            self._items[index] = item
            self.logger.debug(
                "Line item incremented",
                item_id=entry.id,
                quantity=item.quantity,
            )
        self._version += 1
        return item

    def remove_from_cart(self, item_id: str) -> None:
        index = self._index_of(item_id)
        if index is None:
            self.logger.debug("Remove ignored for unknown item", item_id=item_id)
            return
        del self._items[index]
        self._version += 1
        self.logger.debug("Line item removed", item_id=item_id)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity of ``item_id``; zero or less removes the line item."""
        if quantity <= 0:
            self.remove_from_cart(item_id)
            return
        index = self._index_of(item_id)
        if index is None:
            self.logger.debug("Quantity update ignored for unknown item", item_id=item_id)
            return
        current = self._items[index]
        if current.quantity == quantity:
            return
        self._items[index] = replace(current, quantity=int(quantity))
        self._version += 1
        self.logger.debug("Line item quantity set", item_id=item_id, quantity=quantity)

    def clear_cart(self) -> None:
        if not self._items:
            return
        count = len(self._items)
        self._items = []
        self._version += 1
        self.logger.debug("Cart cleared", removed=count)

    # Derived views

    def get_quantity(self, item_id: str) -> int:
        index = self._index_of(item_id)
        return self._items[index].quantity if index is not None else 0

    def get_total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_amount(self) -> Decimal:
        return sum((item.line_total for item in self._items), Decimal("0"))

    def get_cart_by_vendor(self) -> Dict[str, List[CartLineItem]]:
        grouped: Dict[str, List[CartLineItem]] = {}
        for item in self._items:
            grouped.setdefault(item.vendor_id, []).append(item)
        return grouped

    get_cart_by_restaurant = get_cart_by_vendor

    # Names kept for screens written against the restaurant-only cart
    get_cart_total = get_total_amount
    get_item_count = get_total_quantity

    def get_primary_vendor(self) -> Optional[Tuple[str, str]]:
        if not self._items:
            return None
        first = self._items[0]
        return first.vendor_id, first.vendor_name
