import unittest
from decimal import Decimal
from unittest.mock import patch

from django.contrib.sessions.middleware import SessionMiddleware
from rest_framework.test import APIRequestFactory

from apps.carts.registry import CartSessionRegistry
from apps.carts.store import CartEntry
from apps.checkout.planner import CheckoutPlanner
from apps.checkout.services import CheckoutService, OrderDispatchError
from apps.checkout.views import CheckoutSummaryView, CheckoutView


class StubGateway:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = 0

    def create_order(self, order):
        self.calls += 1
        if self.fail:
            raise OrderDispatchError("down", vendor_id=order.vendor_id)
        return {"id": f"o-{self.calls}"}


class CheckoutViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.registry = CartSessionRegistry()
        self.session_id = "checkout-session"
        store = self.registry.open(self.session_id)
        store.add_to_cart(CartEntry(id="m1", name="Rice", price="100", vendor_id="v1", vendor_name="A"))
        store.add_to_cart(CartEntry(id="s1", name="Soap", price="15", vendor_id="v2", vendor_name="B"))
        self.store = store

    def use_gateway(self, gateway):
        service = CheckoutService(
            registry=self.registry,
            planner=CheckoutPlanner(Decimal("300"), Decimal("25")),
            gateway=gateway,
        )
        patches = [
            patch.object(CheckoutView, "service", service),
            patch.object(CheckoutSummaryView, "service", service),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def dispatch(self, request, view_cls):
        SessionMiddleware(lambda r: None).process_request(request)
        request.session["cart_session_id"] = self.session_id
        return view_cls.as_view()(request)

    def post_checkout(self, payload):
        request = self.factory.post("/api/checkout/", payload, format="json")
        return self.dispatch(request, CheckoutView)

    def test_summary(self):
        self.use_gateway(StubGateway())
        response = self.dispatch(self.factory.get("/api/checkout/summary/"), CheckoutSummaryView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["subtotal"], "115.00")
        self.assertEqual(response.data["total"], "440.00")
        self.assertEqual(response.data["vendorCount"], 2)

    def test_successful_checkout_clears_cart(self):
        gateway = StubGateway()
        self.use_gateway(gateway)
        response = self.post_checkout({"name": "Awa", "phone": "700", "address": "Bakau"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(gateway.calls, 2)
        self.assertEqual(response.data["vendorIds"], ["v1", "v2"])
        self.assertEqual(response.data["summary"]["total"], "440.00")
        self.assertTrue(self.store.is_empty)

    def test_missing_details(self):
        self.use_gateway(StubGateway())
        response = self.post_checkout({"name": "Awa"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["details"], {"missing": ["phone", "address"]})

    def test_empty_cart(self):
        self.use_gateway(StubGateway())
        self.store.clear_cart()
        response = self.post_checkout({"name": "Awa", "phone": "700", "address": "Bakau"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_order_failure_keeps_cart(self):
        self.use_gateway(StubGateway(fail=True))
        response = self.post_checkout({"name": "Awa", "phone": "700", "address": "Bakau"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.data["error"]["code"], "ORDER_FAILED")
        self.assertEqual(
            response.data["error"]["details"],
            {"vendorId": "v1", "placedOrders": [], "placedVendorIds": []},
        )
        self.assertEqual(self.store.get_total_quantity(), 2)

    def test_checkout_without_cart_session_is_empty_cart(self):
        self.use_gateway(StubGateway())
        request = self.factory.post(
            "/api/checkout/", {"name": "Awa", "phone": "700", "address": "Bakau"}, format="json"
        )
        SessionMiddleware(lambda r: None).process_request(request)
        response = CheckoutView.as_view()(request)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(len(self.registry), 1)
