import unittest
from decimal import Decimal

from apps.carts.store import CartEntry, CartStore
from apps.checkout.dtos import CustomerDetails
from apps.checkout.planner import CheckoutPlanner


def add(store, item_id, price, vendor_id, times=1):
    for _ in range(times):
        store.add_to_cart(
            CartEntry(
                id=item_id,
                name=item_id,
                price=price,
                vendor_id=vendor_id,
                vendor_name=f"Vendor {vendor_id}",
            )
        )


class CheckoutPlannerTests(unittest.TestCase):
    def setUp(self):
        self.planner = CheckoutPlanner(delivery_fee=Decimal("300"), service_fee=Decimal("25"))
        self.customer = CustomerDetails(
            name="Awa", phone="+2207000000", address="Kairaba Ave", notes="Ring twice"
        )
        self.store = CartStore()
        add(self.store, "m1", "100", "v1", times=2)
        add(self.store, "m2", "50", "v2")
        add(self.store, "m3", "10.5", "v1")

    def test_one_order_per_vendor(self):
        orders = self.planner.plan(self.store, self.customer)
        self.assertEqual([o.vendor_id for o in orders], ["v1", "v2"])
        first = orders[0]
        self.assertEqual([(i.item_id, i.quantity) for i in first.items], [("m1", 2), ("m3", 1)])
        self.assertEqual(first.subtotal, Decimal("210.5"))
        self.assertEqual(first.customer_name, "Awa")
        self.assertEqual(first.notes, "Ring twice")

    def test_payload_uses_order_api_keys(self):
        payload = self.planner.plan(self.store, self.customer)[1].to_payload()
        self.assertEqual(
            payload,
            {
                "restaurantId": "v2",
                "customerName": "Awa",
                "customerPhone": "+2207000000",
                "deliveryAddress": "Kairaba Ave",
                "items": [{"menuItemId": "m2", "quantity": 1}],
                "subtotal": "50",
                "notes": "Ring twice",
            },
        )

    def test_summary_adds_flat_fees_once(self):
        summary = self.planner.summarize(self.store)
        self.assertEqual(summary.subtotal, Decimal("260.5"))
        self.assertEqual(summary.total, Decimal("585.5"))
        self.assertEqual(summary.total_quantity, 4)
        self.assertEqual(summary.vendor_count, 2)

    def test_empty_cart_plans_nothing(self):
        self.assertEqual(self.planner.plan(CartStore(), self.customer), [])
