from __future__ import annotations

from typing import Any, Dict, Protocol

from .dtos import OrderRequest


class OrderGatewayProtocol(Protocol):
    def create_order(self, order: OrderRequest) -> Dict[str, Any]:
        ...
