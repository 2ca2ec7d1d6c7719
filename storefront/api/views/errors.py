"""Mapping of service error codes to HTTP statuses."""

from rest_framework import status
from rest_framework.response import Response

from storefront.services import ErrorCodes

ERROR_STATUS = {
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART: status.HTTP_404_NOT_FOUND,
    ErrorCodes.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_SIZE: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CART_EMPTY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.BACKEND_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def error_response(result) -> Response:
    code = ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"detail": result.error_detail, "error": result.error}, status=code)
