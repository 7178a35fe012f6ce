from __future__ import annotations

from typing import Any, Dict, List, Optional

from apps.common import get_logger

from .commands import CartEntryCommand, QuantityUpdateCommand
from .dtos import CartDTO, VendorCartDTO
from .protocols import CartMapperProtocol, CartRegistryProtocol
from .store import CartStore

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    def __init__(
        self,
        registry: CartRegistryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.registry = registry
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def store_for(self, session_id: str) -> CartStore:
        return self.registry.open(session_id)

    def existing_store(self, session_id: Optional[str]) -> Optional[CartStore]:
        if not session_id:
            return None
        return self.registry.get(session_id)

    def _readable(self, session_id: Optional[str]) -> CartStore:
        # Sessions without a cart read as an empty one; only adding an item opens a store.
        store = self.existing_store(session_id)
        return store if store is not None else CartStore()

    def get_cart(self, session_id: Optional[str]) -> CartDTO:
        self.logger.debug("Fetching cart", session_id=session_id)
        return self.cart_mapper.to_dto(self._readable(session_id))

    def add_item(self, session_id: str, payload: Dict[str, Any]) -> CartDTO:
        command = CartEntryCommand.from_raw(payload)
        store = self.store_for(session_id)
        item = store.add_to_cart(command.entry)
        self.logger.info(
            "Item added to cart",
            session_id=session_id,
            item_id=item.id,
            vendor_id=item.vendor_id,
            quantity=item.quantity,
        )
        return self.cart_mapper.to_dto(store)

    def update_item(self, session_id: Optional[str], item_id: Any, payload: Dict[str, Any]) -> CartDTO:
        command = QuantityUpdateCommand.from_raw(item_id, payload)
        store = self._readable(session_id)
        store.update_quantity(command.item_id, command.quantity)
        self.logger.info(
            "Cart item quantity updated",
            session_id=session_id,
            item_id=command.item_id,
            quantity=command.quantity,
            present=store.get_quantity(command.item_id) > 0,
        )
        return self.cart_mapper.to_dto(store)

    def remove_item(self, session_id: Optional[str], item_id: str) -> CartDTO:
        store = self._readable(session_id)
        store.remove_from_cart(str(item_id))
        self.logger.info("Cart item removed", session_id=session_id, item_id=item_id)
        return self.cart_mapper.to_dto(store)

    def clear_cart(self, session_id: Optional[str]) -> CartDTO:
        store = self._readable(session_id)
        store.clear_cart()
        self.logger.info("Cart cleared", session_id=session_id)
        return self.cart_mapper.to_dto(store)

    def get_item_quantity(self, session_id: Optional[str], item_id: str) -> int:
        return self._readable(session_id).get_quantity(str(item_id))

    def group_by_vendor(self, session_id: Optional[str]) -> List[VendorCartDTO]:
        grouped = self._readable(session_id).get_cart_by_vendor()
        self.logger.debug(
            "Grouping cart by vendor", session_id=session_id, vendors=len(grouped)
        )
        return self.cart_mapper.vendors_to_dto(grouped)

    def end_session(self, session_id: str) -> bool:
        closed = self.registry.teardown(session_id)
        self.logger.info("Cart session ended", session_id=session_id, closed=closed)
        return closed
