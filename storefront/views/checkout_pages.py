"""Checkout page, order placement and the confirmation page."""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.decorators import method_decorator
from django.views import View

from authentication.session import LAST_ORDER_SESSION_KEY
from infrastructure.container import container
from storefront.services import ErrorCodes

from .errors import render_service_error

logger = logging.getLogger(__name__)


def order_to_session(order) -> dict:
    """JSON-safe snapshot of a placed order for the confirmation page."""
    return {
        "order_reference": order["order_reference"],
        "placed_at": order["placed_at"].isoformat(),
        "email": order["email"],
        "items": [
            {
                "name": line.product.name,
                "size": line.size,
                "quantity": line.quantity,
                "image_url": line.product.image_url,
                "line_total": str(line.line_total),
            }
            for line in order["items"]
        ],
        "totals": {key: str(value) for key, value in order["totals"].items()},
    }


@method_decorator(login_required, name="dispatch")
class CheckoutView(View):
    template_name = "storefront/checkout.html"

    def get(self, request):
        result = container.checkout_service().get_summary(request.user)
        if not result.ok:
            if result.error == ErrorCodes.CART_EMPTY:
                messages.info(request, result.error_detail)
                return redirect("storefront:cart")
            return render_service_error(request, result)
        return render(request, self.template_name, {"summary": result.value})

    def post(self, request):
        result = container.checkout_service().place_order(request.user)
        if not result.ok:
            if result.error == ErrorCodes.CART_EMPTY:
                messages.info(request, result.error_detail)
                return redirect("storefront:cart")
            messages.error(request, "Failed to process order. Please try again.")
            return redirect("storefront:checkout")

        request.session[LAST_ORDER_SESSION_KEY] = order_to_session(result.value)
        return redirect("storefront:order-confirmation")


def order_confirmation_view(request):
    order = request.session.get(LAST_ORDER_SESSION_KEY)
    if not order:
        return redirect("storefront:home")
    return render(request, "storefront/order_confirmation.html", {"order": order})
