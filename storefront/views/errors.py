from django.http import Http404
from django.shortcuts import render

from storefront.services import ErrorCodes

NOT_FOUND_CODES = {ErrorCodes.PRODUCT_NOT_FOUND, ErrorCodes.CATEGORY_NOT_FOUND}


def render_service_error(request, result):
    """Unknown records become 404; anything else renders the error page with 502."""
    if result.error in NOT_FOUND_CODES:
        raise Http404(result.error_detail)
    return render(request, "storefront/error.html", {"detail": result.error_detail}, status=502)
