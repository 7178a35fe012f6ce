from django.conf import settings
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _cart_registry_check():
    from apps.carts.container import cart_registry

    sessions = len(cart_registry)
    logger.debug('Cart registry check succeeded', sessions=sessions)
    return {'status': 'ok', 'activeSessions': sessions}


def _order_api_check():
    base_url = getattr(settings, 'ORDER_API_BASE_URL', '')
    if not base_url:
        logger.debug('Order API check skipped; no base URL configured')
        return {'status': 'skipped', 'detail': 'ORDER_API_BASE_URL not set'}
    from apps.checkout.container import build_order_gateway

    result = build_order_gateway().ping()
    if result['status'] != 'ok':
        logger.warning('Order API check failed', **result)
    return result


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the cart registry answers and the order API is reachable."""
    checks = {
        'carts': _cart_registry_check(),
        'orderApi': _order_api_check(),
    }
    degraded = any(check.get('status') == 'fail' for check in checks.values())
    status = 'degraded' if degraded else 'ok'
    if degraded:
        logger.warning('Readiness probe degraded', checks=checks)
    return JsonResponse({'status': status, 'checks': checks}, status=503 if degraded else 200)
