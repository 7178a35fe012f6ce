from __future__ import annotations

from decimal import Decimal

from django.conf import settings

from apps.carts.container import cart_registry
from apps.carts.registry import CartSessionRegistry

from .gateways import HttpOrderGateway
from .planner import CheckoutPlanner
from .services import CheckoutService


def build_order_gateway() -> HttpOrderGateway:
    return HttpOrderGateway(
        settings.ORDER_API_BASE_URL,
        token=settings.ORDER_API_TOKEN or None,
        timeout=float(settings.ORDER_API_TIMEOUT),
    )


def build_checkout_planner() -> CheckoutPlanner:
    return CheckoutPlanner(
        delivery_fee=Decimal(str(settings.CHECKOUT_DELIVERY_FEE)),
        service_fee=Decimal(str(settings.CHECKOUT_SERVICE_FEE)),
    )


def build_checkout_service(registry: CartSessionRegistry = None) -> CheckoutService:
    return CheckoutService(
        registry=registry if registry is not None else cart_registry,
        planner=build_checkout_planner(),
        gateway=build_order_gateway(),
    )
