from prometheus_client import Counter, Histogram

# Hosted backend request metrics
backend_requests_total = Counter(
    "storefront_backend_requests_total", "Requests sent to the hosted backend", ["operation", "status"]
)
backend_request_duration = Histogram(
    "storefront_backend_request_seconds",
    "Hosted backend request duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
