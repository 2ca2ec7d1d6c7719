"""Product grid, category and product detail pages."""

import logging

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect, render
from django.views import View

from infrastructure.container import container
from storefront.domain.models import CATEGORY_PAGES, SIZES
from storefront.forms import AddToCartForm

from .errors import render_service_error

logger = logging.getLogger(__name__)


class ProductListView(View):
    template_name = "storefront/product_list.html"
    title = "All Products"

    def get_category(self, **kwargs):
        """Category name to filter by, or None for every product."""
        return None

    def get_title(self, category):
        return category or self.title

    def get(self, request, **kwargs):
        category = self.get_category(**kwargs)
        result = container.catalog_service().list_products(category=category)
        if not result.ok:
            return render_service_error(request, result)

        context = {"products": result.value, "title": self.get_title(category), "category": category}
        return render(request, self.template_name, context)


class CategoryPageView(ProductListView):
    """Fixed landing pages: /jeans/, /shirts/, /tshirts/."""

    page = None

    def get_category(self, **kwargs):
        return CATEGORY_PAGES[self.page]


class CollectionPageView(ProductListView):
    """Category grid for any row of the ``categories`` table."""

    def get(self, request, slug=None, **kwargs):
        result = container.catalog_service().get_category_by_slug(slug)
        if not result.ok:
            logger.warning(f"Failed to resolve collection {slug}: {result.error_detail}")
            return render_service_error(request, result)
        return super().get(request, category=result.value.name)

    def get_category(self, category=None, **kwargs):
        return category


class ProductDetailView(View):
    template_name = "storefront/product_detail.html"

    def _render(self, request, product, form, status=200):
        pricing = container.pricing_service()
        context = {
            "product": product,
            "form": form,
            "sizes": SIZES,
            "discount_percentage": pricing.calculate_discount_percentage(product).value,
        }
        return render(request, self.template_name, context, status=status)

    def _get_product(self, request, product_id):
        result = container.catalog_service().get_product(product_id)
        if not result.ok:
            return None, render_service_error(request, result)
        return result.value, None

    def get(self, request, product_id):
        product, error = self._get_product(request, product_id)
        if error:
            return error
        return self._render(request, product, AddToCartForm())

    def post(self, request, product_id):
        if not request.user.is_authenticated:
            messages.info(request, "Please sign in to add items to your cart.")
            return redirect_to_login(request.get_full_path())

        product, error = self._get_product(request, product_id)
        if error:
            return error

        form = AddToCartForm(request.POST)
        if not form.is_valid():
            return self._render(request, product, form, status=400)

        result = container.cart_service().add_to_cart(
            request.user, product.id, form.cleaned_data["quantity"], form.cleaned_data["size"]
        )
        if not result.ok:
            form.add_error(None, result.error_detail)
            return self._render(request, product, form, status=400)

        messages.success(request, f"{product.name} ({form.cleaned_data['size']}) added to your cart.")
        return redirect("storefront:product-detail", product_id=product.id)
