from dataclasses import dataclass
from typing import Any, Dict, List

from .dtos import CustomerDetails


class InvalidCustomerDetailsError(ValueError):
    """Raised when required delivery details are missing."""

    def __init__(self, missing: List[str]):
        super().__init__("Please fill in all required fields")
        self.missing = missing


def _text(raw: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return str(value).strip()
    return ""


@dataclass
class CheckoutCommand:
    customer: CustomerDetails

    @staticmethod
    def from_raw(raw: Dict[str, Any]) -> "CheckoutCommand":
        if not isinstance(raw, dict):
            raise InvalidCustomerDetailsError(["name", "phone", "address"])
        name = _text(raw, "name", "customerName")
        phone = _text(raw, "phone", "customerPhone")
        address = _text(raw, "address", "deliveryAddress")
        missing = [
            label
            for label, value in (("name", name), ("phone", phone), ("address", address))
            if not value
        ]
        if missing:
            raise InvalidCustomerDetailsError(missing)
        customer = CustomerDetails(
            name=name,
            phone=phone,
            address=address,
            email=_text(raw, "email") or None,
            notes=_text(raw, "notes") or None,
        )
        return CheckoutCommand(customer=customer)
