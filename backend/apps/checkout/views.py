from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.carts.session import get_cart_session_id
from apps.common import get_logger
from .commands import InvalidCustomerDetailsError
from .container import build_checkout_service
from .serializers import (
    CheckoutResultSerializer,
    CheckoutSummarySerializer,
    CheckoutWriteSerializer,
)

logger = get_logger(__name__).bind(component="checkout", layer="view")


class CheckoutSummaryView(APIView):
    permission_classes = [AllowAny]
    service = build_checkout_service()

    @extend_schema(summary="Checkout totals", responses={200: CheckoutSummarySerializer})
    def get(self, request):
        session_id = get_cart_session_id(request, create=False)
        summary = self.service.get_summary(session_id)
        return Response(CheckoutSummarySerializer(summary).data)


class CheckoutView(APIView):
    permission_classes = [AllowAny]
    service = build_checkout_service()
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        summary="Place orders",
        description=(
            "Creates one order per vendor in the session cart. The cart is cleared only "
            "after every vendor order was accepted."
        ),
        request=CheckoutWriteSerializer,
        responses={
            201: CheckoutResultSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            422: OpenApiResponse(response=ErrorResponseSerializer),
            502: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        session_id = get_cart_session_id(request, create=False)
        try:
            result = self.service.place_orders(session_id, request.data)
        except InvalidCustomerDetailsError as exc:
            self.log.info(
                "Checkout rejected: missing details",
                session_id=session_id,
                missing=exc.missing,
            )
            return error_response(
                "VALIDATION_ERROR", str(exc), {"missing": exc.missing}
            )
        self.log.info(
            "Orders placed via API", session_id=session_id, orders=len(result.orders)
        )
        return Response(
            CheckoutResultSerializer(result).data, status=status.HTTP_201_CREATED
        )
