from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Protocol, Tuple, TYPE_CHECKING

from .store import CartEntry, CartLineItem, CartStore

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO, VendorCartDTO


class CartStoreProtocol(Protocol):
    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        ...

    def add_to_cart(self, entry: CartEntry) -> CartLineItem:
        ...

    def remove_from_cart(self, item_id: str) -> None:
        ...

    def update_quantity(self, item_id: str, quantity: int) -> None:
        ...

    def clear_cart(self) -> None:
        ...

    def get_quantity(self, item_id: str) -> int:
        ...

    def get_total_quantity(self) -> int:
        ...

    def get_total_amount(self) -> Decimal:
        ...

    def get_cart_by_vendor(self) -> Dict[str, List[CartLineItem]]:
        ...


class CartRegistryProtocol(Protocol):
    def open(self, session_id: str) -> CartStore:
        ...

    def get(self, session_id: str) -> Optional[CartStore]:
        ...

    def teardown(self, session_id: str) -> bool:
        ...

    def __len__(self) -> int:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, store: CartStore) -> "CartDTO":
        ...

    def vendors_to_dto(
        self, grouped: Dict[str, List[CartLineItem]]
    ) -> List["VendorCartDTO"]:
        ...
