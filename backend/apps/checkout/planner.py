from __future__ import annotations

from decimal import Decimal
from typing import List

from apps.carts.protocols import CartStoreProtocol

from .dtos import CheckoutSummary, CustomerDetails, OrderItem, OrderRequest


class CheckoutPlanner:
    """Turns a session cart into one order request per vendor plus a fee summary."""

    def __init__(self, delivery_fee: Decimal, service_fee: Decimal):
        self.delivery_fee = Decimal(delivery_fee)
        self.service_fee = Decimal(service_fee)

    def plan(self, store: CartStoreProtocol, customer: CustomerDetails) -> List[OrderRequest]:
        orders: List[OrderRequest] = []
        for vendor_id, items in store.get_cart_by_vendor().items():
            orders.append(
                OrderRequest(
                    vendor_id=vendor_id,
                    vendor_name=items[0].vendor_name,
                    customer_name=customer.name,
                    customer_phone=customer.phone,
                    delivery_address=customer.address,
                    items=[OrderItem(item_id=i.id, quantity=i.quantity) for i in items],
                    subtotal=sum((i.line_total for i in items), Decimal("0")),
                    notes=customer.notes,
                )
            )
        return orders

    def summarize(self, store: CartStoreProtocol) -> CheckoutSummary:
        # Fees are charged once per checkout, not per vendor order.
        subtotal = store.get_total_amount()
        return CheckoutSummary(
            subtotal=subtotal,
            delivery_fee=self.delivery_fee,
            service_fee=self.service_fee,
            total=subtotal + self.delivery_fee + self.service_fee,
            total_quantity=store.get_total_quantity(),
            vendor_count=len(store.get_cart_by_vendor()),
        )
