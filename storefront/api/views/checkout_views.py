import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from storefront.api.serializers import CheckoutSummarySerializer, ErrorResponseSerializer, OrderConfirmationSerializer

from .errors import error_response

logger = logging.getLogger(__name__)


class CheckoutSummaryAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="checkout_summary",
        summary="Get checkout summary",
        description="Cart lines with subtotal, flat shipping, tax and total.",
        responses={
            200: OpenApiResponse(response=CheckoutSummarySerializer, description="Summary computed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Cart is empty"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Checkout"],
    )
    def get(self, request):
        result = container.checkout_service().get_summary(request.user)

        if not result.ok:
            return error_response(result)

        return Response(CheckoutSummarySerializer(result.value).data, status=status.HTTP_200_OK)


class PlaceOrderAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="checkout_place_order",
        summary="Place order",
        description="""
        **What it does:**
        - Computes the order totals from the current cart
        - Issues an order reference
        - Empties the cart
        """,
        request=None,
        responses={
            201: OpenApiResponse(response=OrderConfirmationSerializer, description="Order placed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Cart is empty"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Checkout"],
    )
    def post(self, request):
        result = container.checkout_service().place_order(request.user)

        if not result.ok:
            return error_response(result)

        return Response(OrderConfirmationSerializer(result.value).data, status=status.HTTP_201_CREATED)
