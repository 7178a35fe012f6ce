from __future__ import annotations

from typing import Any, Dict, List, Optional

from apps.api.exceptions import ApplicationError
from apps.carts.protocols import CartRegistryProtocol
from apps.carts.store import CartStore
from apps.common import get_logger

from .commands import CheckoutCommand
from .dtos import CheckoutResult, CheckoutSummary
from .planner import CheckoutPlanner
from .protocols import OrderGatewayProtocol

logger = get_logger(__name__).bind(component="checkout", layer="service")


class EmptyCartError(ApplicationError):
    """Raised when checkout is attempted on a cart with no line items."""

    def __init__(self, message: str = "Your cart is empty"):
        super().__init__("EMPTY_CART", message)


class OrderDispatchError(ApplicationError):
    """Raised when the order API rejects or cannot receive an order."""

    def __init__(
        self,
        message: str,
        *,
        vendor_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            "ORDER_FAILED",
            "There was an error placing your order. Please try again.",
            details={"vendorId": vendor_id} if vendor_id else None,
        )
        self.reason = message
        self.vendor_id = vendor_id
        self.upstream_status = status_code
        self.placed_orders: List[Dict[str, Any]] = []
        self.placed_vendor_ids: List[str] = []

    def record_placed(self, orders: List[Dict[str, Any]], vendor_ids: List[str]) -> None:
        """Attach the orders accepted before this failure so a retry can skip them."""
        self.placed_orders = list(orders)
        self.placed_vendor_ids = list(vendor_ids)
        self.details = {
            **(self.details or {}),
            "placedOrders": self.placed_orders,
            "placedVendorIds": self.placed_vendor_ids,
        }


class CheckoutService:
    def __init__(
        self,
        registry: CartRegistryProtocol,
        planner: CheckoutPlanner,
        gateway: OrderGatewayProtocol,
    ):
        self.registry = registry
        self.planner = planner
        self.gateway = gateway
        self.logger = logger.bind(service="CheckoutService")

    def _existing_store(self, session_id: Optional[str]) -> Optional[CartStore]:
        return self.registry.get(session_id) if session_id else None

    def get_summary(self, session_id: Optional[str]) -> CheckoutSummary:
        store = self._existing_store(session_id)
        return self.planner.summarize(store if store is not None else CartStore())

    def place_orders(self, session_id: Optional[str], payload: Dict[str, Any]) -> CheckoutResult:
        """
        Create one order per vendor in the session cart.

        The cart is cleared only after every order was accepted. Any dispatch
        failure leaves the cart as it was so the customer can retry; the raised
        error lists the vendor orders that had already been accepted.
        """
        command = CheckoutCommand.from_raw(payload)
        store = self._existing_store(session_id)
        if store is None or store.is_empty:
            self.logger.info("Checkout rejected: empty cart", session_id=session_id)
            raise EmptyCartError("Your cart is empty")
        summary = self.planner.summarize(store)
        orders = self.planner.plan(store, command.customer)
        self.logger.info(
            "Dispatching vendor orders",
            session_id=session_id,
            vendors=len(orders),
            subtotal=summary.subtotal,
        )
        created: List[Dict[str, Any]] = []
        for order in orders:
            try:
                created.append(self.gateway.create_order(order))
            except OrderDispatchError as exc:
                exc.record_placed(created, [o.vendor_id for o in orders[: len(created)]])
                self.logger.warning(
                    "Vendor order failed; cart kept",
                    session_id=session_id,
                    vendor_id=order.vendor_id,
                    created_before_failure=len(created),
                    error=exc.reason,
                )
                raise
        store.clear_cart()
        self.logger.info(
            "Checkout completed", session_id=session_id, orders=len(created)
        )
        return CheckoutResult(
            orders=created,
            summary=summary,
            vendor_ids=[o.vendor_id for o in orders],
        )
