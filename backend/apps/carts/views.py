from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_cart_service
from .serializers import (
    CartEntryWriteSerializer,
    CartItemQuantitySerializer,
    CartQuantityWriteSerializer,
    CartReadSerializer,
    VendorCartSerializer,
)
from .session import forget_cart_session, get_cart_session_id
from .store import InvalidCartEntryError

logger = get_logger(__name__).bind(component="carts", layer="view")

ITEM_ID_PARAMETER = OpenApiParameter("item_id", str, OpenApiParameter.PATH)


def _validation_error(exc: InvalidCartEntryError):
    details = {"field": exc.field} if exc.field else None
    return error_response("VALIDATION_ERROR", str(exc), details)


class CartView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(summary="Get session cart", responses={200: CartReadSerializer})
    def get(self, request):
        session_id = get_cart_session_id(request, create=False)
        dto = self.service.get_cart(session_id)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(summary="Clear session cart", responses={200: CartReadSerializer})
    def delete(self, request):
        session_id = get_cart_session_id(request, create=False)
        dto = self.service.clear_cart(session_id)
        self.log.info("Cart cleared via API", session_id=session_id)
        return Response(CartReadSerializer(dto).data)


class CartItemListView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add item to cart",
        description=(
            "Adds one unit of the item. Adding an id already in the cart increases its quantity "
            "and keeps the stored name and price. Items from different vendors may share one cart."
        ),
        request=CartEntryWriteSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        session_id = get_cart_session_id(request)
        try:
            dto = self.service.add_item(session_id, request.data)
        except InvalidCartEntryError as exc:
            self.log.warning(
                "Rejected cart entry", session_id=session_id, error=str(exc), field=exc.field
            )
            return _validation_error(exc)
        return Response(CartReadSerializer(dto).data)


class CartItemDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartItemDetailView")

    @extend_schema(
        summary="Get item quantity",
        description="Returns the quantity held for the item, or 0 when it is not in the cart.",
        parameters=[ITEM_ID_PARAMETER],
        responses={200: CartItemQuantitySerializer},
    )
    def get(self, request, item_id: str):
        session_id = get_cart_session_id(request, create=False)
        quantity = self.service.get_item_quantity(session_id, item_id)
        return Response(CartItemQuantitySerializer({"id": item_id, "quantity": quantity}).data)

    @extend_schema(
        summary="Set item quantity",
        description="A quantity of zero or less removes the item. Unknown ids are ignored.",
        parameters=[ITEM_ID_PARAMETER],
        request=CartQuantityWriteSerializer,
        responses={
            200: CartReadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, item_id: str):
        session_id = get_cart_session_id(request, create=False)
        try:
            dto = self.service.update_item(session_id, item_id, request.data)
        except InvalidCartEntryError as exc:
            self.log.warning(
                "Rejected quantity update",
                session_id=session_id,
                item_id=item_id,
                error=str(exc),
            )
            return _validation_error(exc)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Remove item",
        description="Removing an id that is not in the cart is not an error.",
        parameters=[ITEM_ID_PARAMETER],
        responses={200: CartReadSerializer},
    )
    def delete(self, request, item_id: str):
        session_id = get_cart_session_id(request, create=False)
        dto = self.service.remove_item(session_id, item_id)
        return Response(CartReadSerializer(dto).data)


class CartVendorListView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()

    @extend_schema(
        summary="Cart grouped by vendor",
        description="One entry per vendor; checkout creates one order for each.",
        responses={200: VendorCartSerializer(many=True)},
    )
    def get(self, request):
        session_id = get_cart_session_id(request, create=False)
        groups = self.service.group_by_vendor(session_id)
        return Response(VendorCartSerializer(groups, many=True).data)


class CartSessionView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartSessionView")

    @extend_schema(summary="End cart session", responses={204: None})
    def delete(self, request):
        session_id = get_cart_session_id(request, create=False)
        if session_id is not None:
            self.service.end_session(session_id)
            forget_cart_session(request)
        self.log.info("Cart session end requested", session_id=session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
