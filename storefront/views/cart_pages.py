"""Cart page and its POST actions (update quantity, remove line, clear)."""

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from infrastructure.container import container
from storefront.forms import CartLineForm

from .errors import render_service_error


@login_required
def cart_view(request):
    result = container.cart_service().get_cart(request.user)
    if not result.ok:
        return render_service_error(request, result)
    return render(request, "storefront/cart.html", {"cart": result.value})


@login_required
@require_POST
def cart_update_view(request):
    form = CartLineForm(request.POST)
    if not form.is_valid() or not form.cleaned_data.get("quantity"):
        messages.error(request, "Quantity must be at least 1.")
        return redirect("storefront:cart")

    result = container.cart_service().update_quantity(
        request.user,
        form.cleaned_data["product_id"],
        form.cleaned_data["quantity"],
        size=form.cleaned_data.get("size") or None,
    )
    if not result.ok:
        messages.error(request, result.error_detail)
    return redirect("storefront:cart")


@login_required
@require_POST
def cart_remove_view(request):
    form = CartLineForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Unknown cart item.")
        return redirect("storefront:cart")

    result = container.cart_service().remove_from_cart(
        request.user, form.cleaned_data["product_id"], size=form.cleaned_data.get("size") or None
    )
    if result.ok:
        messages.info(request, "Item removed from your cart.")
    else:
        messages.error(request, result.error_detail)
    return redirect("storefront:cart")


@login_required
@require_POST
def cart_clear_view(request):
    result = container.cart_service().clear_cart(request.user)
    if result.ok:
        messages.info(request, "Your cart has been cleared.")
    else:
        messages.error(request, result.error_detail)
    return redirect("storefront:cart")
