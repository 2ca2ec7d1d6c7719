"""
Prometheus Metrics

Authentication metrics, exposed together with the storefront metrics at
/api/metrics/ for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Failed login attempts counter.
Labels: reason (validation_error, invalid_credentials, backend_error)
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status"])
"""
Total registration attempts.
Labels: status (success/pending_confirmation/failed)
"""


# ===== Token Metrics =====

token_validation_total = Counter("auth_token_validation_total", "Total bearer token validations", ["status"])
"""
Labels: status (valid/invalid)
"""
