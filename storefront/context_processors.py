from django.conf import settings

from storefront.domain.models import CATEGORY_PAGES


def _cart_count(request):
    from infrastructure.container import container

    result = container.cart_service().get_cart(request.user)
    if not result.ok:
        return 0
    return sum(line.quantity for line in result.value["items"])


def storefront(request):
    """Navigation and cart badge for every page."""
    user = getattr(request, "user", None)
    authenticated = bool(user is not None and user.is_authenticated)

    return {
        "brand_name": settings.STOREFRONT.get("BRAND_NAME", "Bloom"),
        "nav_categories": [{"slug": slug, "name": name} for slug, name in CATEGORY_PAGES.items()],
        # Templates call this lazily, only pages that show the badge hit the backend
        "cart_count": (lambda: _cart_count(request)) if authenticated else 0,
    }
