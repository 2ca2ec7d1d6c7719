import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from infrastructure.container import container
from storefront.api.serializers import CategorySerializer, ErrorResponseSerializer, ProductSerializer
from storefront.services import CatalogService

from .errors import error_response

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description="Products ordered newest first, optionally limited to one category.",
        parameters=[
            OpenApiParameter("category", OpenApiTypes.STR, OpenApiParameter.QUERY, description="Category name"),
        ],
        responses={
            200: ProductSerializer(many=True),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Catalog"],
    ),
    retrieve=extend_schema(
        summary="Get product details",
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Catalog"],
    ),
)
class ProductViewSet(viewsets.ViewSet):
    """
    ViewSet for products - read-only operations using Service Layer
    """

    permission_classes = [AllowAny]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def list(self, request):
        category = request.query_params.get("category") or None
        result = self.get_service().list_products(category=category)

        if not result.ok:
            return error_response(result)

        return Response(ProductSerializer(result.value, many=True).data)

    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk)

        if not result.ok:
            return error_response(result)

        return Response(ProductSerializer(result.value).data)


@extend_schema_view(
    list=extend_schema(
        summary="List all categories",
        responses={
            200: CategorySerializer(many=True),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Catalog"],
    ),
)
class CategoryViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def list(self, request):
        result = self.get_service().list_categories()

        if not result.ok:
            return error_response(result)

        return Response(CategorySerializer(result.value, many=True).data)
