from django.urls import path

from . import views

app_name = "storefront"

urlpatterns = [
    path("", views.ProductListView.as_view(), name="home"),
    path("products/", views.ProductListView.as_view(), name="product-list"),
    path("products/<str:product_id>/", views.ProductDetailView.as_view(), name="product-detail"),
    path("jeans/", views.CategoryPageView.as_view(page="jeans"), name="jeans"),
    path("shirts/", views.CategoryPageView.as_view(page="shirts"), name="shirts"),
    path("tshirts/", views.CategoryPageView.as_view(page="tshirts"), name="tshirts"),
    path("collections/<slug:slug>/", views.CollectionPageView.as_view(), name="collection"),
    # Cart
    path("cart/", views.cart_view, name="cart"),
    path("cart/update/", views.cart_update_view, name="cart-update"),
    path("cart/remove/", views.cart_remove_view, name="cart-remove"),
    path("cart/clear/", views.cart_clear_view, name="cart-clear"),
    # Checkout
    path("checkout/", views.CheckoutView.as_view(), name="checkout"),
    path("order-confirmation/", views.order_confirmation_view, name="order-confirmation"),
    # Static pages
    path("about/", views.AboutView.as_view(), name="about"),
    path("contact/", views.ContactView.as_view(), name="contact"),
]
