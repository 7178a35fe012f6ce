from dataclasses import dataclass
from typing import Any, Dict, Optional

from .store import CartEntry, InvalidCartEntryError


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    return None


def _as_optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass
class CartEntryCommand:
    entry: CartEntry

    @staticmethod
    def from_raw(raw: Dict[str, Any]) -> "CartEntryCommand":
        if not isinstance(raw, dict):
            raise InvalidCartEntryError("Payload must be an object")
        item_id = _as_id(_first(raw, "id", "itemId", "item_id"))
        # restaurantId/restaurantName come from the restaurant-only client
        vendor_id = _as_id(
            _first(raw, "vendorId", "vendor_id", "restaurantId", "restaurant_id")
        )
        vendor_name = _first(
            raw, "vendorName", "vendor_name", "restaurantName", "restaurant_name"
        )
        if item_id is None:
            raise InvalidCartEntryError("id is required", field="id")
        if vendor_id is None:
            raise InvalidCartEntryError("vendorId is required", field="vendorId")
        if "price" not in raw or raw.get("price") is None:
            raise InvalidCartEntryError("price is required", field="price")
        entry = CartEntry(
            id=item_id,
            name=str(raw.get("name") or ""),
            price=raw["price"],
            vendor_id=vendor_id,
            vendor_name=str(vendor_name or ""),
            image_url=_as_optional_text(_first(raw, "imageUrl", "image_url")),
            description=_as_optional_text(raw.get("description")),
            entity_type=_as_optional_text(_first(raw, "entityType", "entity_type")),
        )
        return CartEntryCommand(entry=entry)


@dataclass
class QuantityUpdateCommand:
    item_id: str
    quantity: int

    @staticmethod
    def from_raw(item_id: Any, raw: Dict[str, Any]) -> "QuantityUpdateCommand":
        if not isinstance(raw, dict):
            raise InvalidCartEntryError("Payload must be an object")
        normalized_id = _as_id(item_id)
        if normalized_id is None:
            raise InvalidCartEntryError("id is required", field="id")
        value = raw.get("quantity")
        if isinstance(value, bool) or value is None:
            raise InvalidCartEntryError("quantity must be an integer", field="quantity")
        try:
            qty = int(value)
        except (ValueError, TypeError) as exc:
            raise InvalidCartEntryError(
                "quantity must be an integer", field="quantity"
            ) from exc
        if isinstance(value, float) and value != qty:
            raise InvalidCartEntryError("quantity must be an integer", field="quantity")
        return QuantityUpdateCommand(item_id=normalized_id, quantity=qty)
