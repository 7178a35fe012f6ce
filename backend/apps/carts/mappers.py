from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from .dtos import CartDTO, CartLineItemDTO, VendorCartDTO
from .store import CartLineItem, CartStore

CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """Round to two decimals for display. Running totals stay unrounded."""
    return str(Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


class CartLineItemMapper:
    def to_dto(self, item: CartLineItem) -> CartLineItemDTO:
        return CartLineItemDTO(
            id=item.id,
            name=item.name,
            price=format_money(item.price),
            quantity=item.quantity,
            line_total=format_money(item.line_total),
            vendor_id=item.vendor_id,
            vendor_name=item.vendor_name,
            image_url=item.image_url,
            description=item.description,
            entity_type=item.entity_type,
        )

    def many_to_dto(self, items: Iterable[CartLineItem]) -> List[CartLineItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, line_item_mapper: Optional[CartLineItemMapper] = None) -> None:
        self.line_item_mapper = line_item_mapper or CartLineItemMapper()

    def to_dto(self, store: CartStore) -> CartDTO:
        return CartDTO(
            items=self.line_item_mapper.many_to_dto(store.items),
            total_quantity=store.get_total_quantity(),
            total_amount=format_money(store.get_total_amount()),
            vendor_count=len(store.get_cart_by_vendor()),
        )

    def vendors_to_dto(
        self, grouped: Dict[str, List[CartLineItem]]
    ) -> List[VendorCartDTO]:
        out: List[VendorCartDTO] = []
        for vendor_id, items in grouped.items():
            subtotal = sum((i.line_total for i in items), Decimal("0"))
            out.append(
                VendorCartDTO(
                    vendor_id=vendor_id,
                    vendor_name=items[0].vendor_name,
                    items=self.line_item_mapper.many_to_dto(items),
                    subtotal=format_money(subtotal),
                    quantity=sum(i.quantity for i in items),
                )
            )
        return out
