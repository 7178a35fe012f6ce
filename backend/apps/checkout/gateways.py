from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from apps.common import get_logger

from .dtos import OrderRequest
from .services import OrderDispatchError

logger = get_logger(__name__).bind(component="checkout", layer="gateway")


class HttpOrderGateway:
    """Posts order-creation requests to the marketplace order API. One attempt per order."""

    path = "/api/orders"

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport
        self.logger = logger.bind(gateway="HttpOrderGateway", base_url=self.base_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        )

    def create_order(self, order: OrderRequest) -> Dict[str, Any]:
        if not self.base_url:
            self.logger.error("Order API base URL not configured", vendor_id=order.vendor_id)
            raise OrderDispatchError("Order API base URL not configured", vendor_id=order.vendor_id)
        payload = order.to_payload()
        self.logger.debug(
            "Creating order", vendor_id=order.vendor_id, items=len(order.items)
        )
        try:
            with self._client() as client:
                resp = client.post(self.path, json=payload)
        except httpx.RequestError as exc:
            self.logger.error(
                "Order API unreachable", vendor_id=order.vendor_id, error=str(exc)
            )
            raise OrderDispatchError(
                "Order service unavailable", vendor_id=order.vendor_id
            ) from exc
        if resp.status_code >= 400:
            self.logger.warning(
                "Order API rejected order",
                vendor_id=order.vendor_id,
                status=resp.status_code,
            )
            raise OrderDispatchError(
                f"Order service returned {resp.status_code}",
                vendor_id=order.vendor_id,
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {"status": resp.status_code}
        self.logger.info(
            "Order created", vendor_id=order.vendor_id, order_id=body.get("id")
        )
        return body

    def ping(self) -> Dict[str, Any]:
        try:
            with self._client() as client:
                resp = client.get("/")
        except httpx.RequestError as exc:
            return {"status": "fail", "error": str(exc)}
        return {"status": "ok" if resp.status_code < 500 else "fail", "httpStatus": resp.status_code}
