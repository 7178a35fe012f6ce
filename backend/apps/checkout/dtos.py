from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class CustomerDetails:
    name: str
    phone: str
    address: str
    email: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class OrderItem:
    item_id: str
    quantity: int


@dataclass
class OrderRequest:
    vendor_id: str
    vendor_name: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    items: List[OrderItem]
    subtotal: Decimal
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Body expected by the order API's create endpoint."""
        payload: Dict[str, Any] = {
            "restaurantId": self.vendor_id,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "deliveryAddress": self.delivery_address,
            "items": [
                {"menuItemId": item.item_id, "quantity": item.quantity}
                for item in self.items
            ],
            "subtotal": str(self.subtotal),
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload


@dataclass
class CheckoutSummary:
    subtotal: Decimal
    delivery_fee: Decimal
    service_fee: Decimal
    total: Decimal
    total_quantity: int
    vendor_count: int


@dataclass
class CheckoutResult:
    orders: List[Dict[str, Any]]
    summary: CheckoutSummary
    vendor_ids: List[str] = field(default_factory=list)
