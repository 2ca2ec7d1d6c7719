from prometheus_client import Counter, Histogram


# Cart Metrics
cart_operations_total = Counter("storefront_cart_operations_total", "Cart operations", ["operation", "status"])

# Order Metrics
orders_placed_total = Counter("storefront_orders_placed_total", "Total orders placed", ["status"])
order_value = Histogram(
    "storefront_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)
