from dataclasses import dataclass
from typing import List, Optional


@dataclass
class CartLineItemDTO:
    id: str
    name: str
    price: str
    quantity: int
    line_total: str
    vendor_id: str
    vendor_name: str
    image_url: Optional[str] = None
    description: Optional[str] = None
    entity_type: Optional[str] = None


@dataclass
class VendorCartDTO:
    vendor_id: str
    vendor_name: str
    items: List[CartLineItemDTO]
    subtotal: str
    quantity: int


@dataclass
class CartDTO:
    items: List[CartLineItemDTO]
    total_quantity: int
    total_amount: str
    vendor_count: int


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
