from __future__ import annotations

import uuid
from typing import Optional

from django.conf import settings


def _session_key_name() -> str:
    return getattr(settings, "CART_SESSION_KEY", "cart_session_id")


def get_cart_session_id(request, create: bool = True) -> Optional[str]:
    """
    Return the cart session id stored in the client's Django session.

    A fresh id is generated on first use when ``create`` is true.
    """
    session = request.session
    key = _session_key_name()
    session_id = session.get(key)
    if session_id is None and create:
        session_id = uuid.uuid4().hex
        session[key] = session_id
    return session_id


def forget_cart_session(request) -> None:
    request.session.pop(_session_key_name(), None)
