from __future__ import annotations

from django.conf import settings

from .mappers import CartLineItemMapper, CartMapper
from .registry import CartSessionRegistry
from .services import CartService

# One registry per process. A store outlives neither its teardown nor the
# session cookie that names it.
cart_registry = CartSessionRegistry(
    idle_timeout=getattr(settings, "SESSION_COOKIE_AGE", None),
)


def build_cart_service(registry: CartSessionRegistry = None) -> CartService:
    return CartService(
        registry=registry if registry is not None else cart_registry,
        cart_mapper=CartMapper(CartLineItemMapper()),
    )
