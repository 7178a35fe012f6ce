import json
from decimal import Decimal

import httpx
import pytest

from apps.checkout.dtos import OrderItem, OrderRequest
from apps.checkout.gateways import HttpOrderGateway
from apps.checkout.services import OrderDispatchError


def make_order():
    return OrderRequest(
        vendor_id="v1",
        vendor_name="Grill",
        customer_name="Awa",
        customer_phone="7000000",
        delivery_address="Serrekunda",
        items=[OrderItem(item_id="m1", quantity=2)],
        subtotal=Decimal("200"),
    )


def test_create_order_posts_payload_with_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": "o-1"})

    gateway = HttpOrderGateway(
        "http://orders.test/", token="secret", transport=httpx.MockTransport(handler)
    )
    result = gateway.create_order(make_order())
    assert result == {"id": "o-1"}
    assert seen["url"] == "http://orders.test/api/orders"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["restaurantId"] == "v1"
    assert seen["body"]["items"] == [{"menuItemId": "m1", "quantity": 2}]
    assert "notes" not in seen["body"]


def test_error_status_raises_dispatch_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "x"}))
    gateway = HttpOrderGateway("http://orders.test", transport=transport)
    with pytest.raises(OrderDispatchError) as excinfo:
        gateway.create_order(make_order())
    assert excinfo.value.upstream_status == 500
    assert excinfo.value.vendor_id == "v1"


def test_transport_error_raises_dispatch_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    gateway = HttpOrderGateway("http://orders.test", transport=httpx.MockTransport(handler))
    with pytest.raises(OrderDispatchError) as excinfo:
        gateway.create_order(make_order())
    assert excinfo.value.upstream_status is None


def test_non_json_success_body_is_summarised():
    transport = httpx.MockTransport(lambda request: httpx.Response(204))
    gateway = HttpOrderGateway("http://orders.test", transport=transport)
    assert gateway.create_order(make_order()) == {"status": 204}


def test_ping_reports_status():
    ok = HttpOrderGateway(
        "http://orders.test", transport=httpx.MockTransport(lambda r: httpx.Response(404))
    )
    assert ok.ping() == {"status": "ok", "httpStatus": 404}
    down = HttpOrderGateway(
        "http://orders.test", transport=httpx.MockTransport(lambda r: httpx.Response(503))
    )
    assert down.ping()["status"] == "fail"


def test_unconfigured_base_url_fails_without_sending():
    calls = []
    transport = httpx.MockTransport(lambda request: calls.append(request) or httpx.Response(201))
    gateway = HttpOrderGateway("", transport=transport)
    with pytest.raises(OrderDispatchError) as excinfo:
        gateway.create_order(make_order())
    assert excinfo.value.reason == "Order API base URL not configured"
    assert calls == []
