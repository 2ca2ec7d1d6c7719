from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from storefront.api.serializers import (
    AddToCartRequestSerializer,
    CartResponseSerializer,
    CartStatusSerializer,
    ErrorResponseSerializer,
    RemoveFromCartRequestSerializer,
    UpdateCartRequestSerializer,
)
from storefront.services import CartService

from .errors import error_response


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        return container.cart_service()

    def get_output_serializer(self, *args, **kwargs):
        return CartResponseSerializer(*args, **kwargs)

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it receives:**
        - Authentication token (header) or session cookie

        **What it returns:**
        - Cart lines with product details
        - Totals (subtotal, total, savings)
        - Line count
        """,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Cart retrieved successfully"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    def list(self, request):
        result = self.get_service().get_cart(request.user)

        if not result.ok:
            return error_response(result)

        return Response(self.get_output_serializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `product_id`: Product to add
        - `size`: One of S, M, L, XL
        - `quantity` (integer, optional): Quantity to add (default: 1)

        **What it returns:**
        - Updated cart with all items
        """,
        request=AddToCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item added successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid quantity or size"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    @action(detail=False, methods=["post"])
    def add_item(self, request):
        input_serializer = AddToCartRequestSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(input_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = input_serializer.validated_data
        result = self.get_service().add_to_cart(request.user, data["product_id"], data["quantity"], data["size"])

        if not result.ok:
            return error_response(result)

        return Response(self.get_output_serializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_update_item",
        summary="Update item quantity in cart",
        description="""
        **What it receives:**
        - `product_id`: Product to update
        - `quantity` (integer): New quantity (at least 1)
        - `size` (optional): Only update this size; every size otherwise
        """,
        request=UpdateCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item updated successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    @action(detail=False, methods=["patch"])
    def update_item(self, request):
        input_serializer = UpdateCartRequestSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(input_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = input_serializer.validated_data
        result = self.get_service().update_quantity(
            request.user, data["product_id"], data["quantity"], size=data.get("size")
        )

        if not result.ok:
            return error_response(result)

        return Response(self.get_output_serializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove item from cart",
        description="""
        **What it receives:**
        - `product_id`: Product to remove
        - `size` (optional): Only remove this size; every size otherwise
        """,
        request=RemoveFromCartRequestSerializer,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Item removed successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid product_id"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not in cart"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    @action(detail=False, methods=["delete"])
    def remove_item(self, request):
        input_serializer = RemoveFromCartRequestSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(input_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = input_serializer.validated_data
        result = self.get_service().remove_from_cart(request.user, data["product_id"], size=data.get("size"))

        if not result.ok:
            return error_response(result)

        return Response(self.get_output_serializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_clear",
        summary="Clear all items from cart",
        responses={
            204: OpenApiResponse(description="Cart cleared successfully"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    @action(detail=False, methods=["delete"])
    def clear(self, request):
        result = self.get_service().clear_cart(request.user)

        if not result.ok:
            return error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="cart_status",
        summary="Get cart status summary",
        description="""
        **What it returns:**
        - Cart ID
        - Line count and total quantity
        - Total amount
        """,
        responses={
            200: OpenApiResponse(response=CartStatusSerializer, description="Cart status retrieved successfully"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Cart"],
    )
    @action(detail=False, methods=["get"])
    def status(self, request):
        result = self.get_service().get_cart(request.user)

        if not result.ok:
            return error_response(result)

        cart_data = result.value
        status_data = {
            "id": cart_data["id"],
            "total_items": cart_data["items_count"],
            "total_quantity": sum(line.quantity for line in cart_data["items"]),
            "total_amount": cart_data["totals"]["total"],
        }
        return Response(CartStatusSerializer(status_data).data, status=status.HTTP_200_OK)
