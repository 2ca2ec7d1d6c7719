"""
PostgREST Backend Adapter
=========================

Concrete implementation of HostedBackendInterface over the hosted backend's
auto-generated REST interface (``/rest/v1/<table>``), using ``requests``.

Configuration (in settings.py):
    HOSTED_BACKEND["URL"]: Project URL, e.g. https://xyz.supabase.co
    HOSTED_BACKEND["ANON_KEY"]: Public anonymous API key
    HOSTED_BACKEND["TIMEOUT"]: Request timeout in seconds
"""

import logging
import time
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from utils.logging_utils import sanitize_payload

from .interface import Filters, HostedBackendError, HostedBackendInterface, Op
from .metrics import backend_request_duration, backend_requests_total

logger = logging.getLogger(__name__)

_RESERVED_CHARS = set(',()"\\ ')


def load_backend_settings() -> Dict[str, Any]:
    """Read and validate the HOSTED_BACKEND settings block."""
    config = getattr(settings, "HOSTED_BACKEND", {}) or {}
    url = (config.get("URL") or "").rstrip("/")
    anon_key = config.get("ANON_KEY") or ""

    if not url or not anon_key:
        raise ImproperlyConfigured("Missing hosted backend environment variables (HOSTED_BACKEND_URL/ANON_KEY)")

    return {"url": url, "anon_key": anon_key, "timeout": float(config.get("TIMEOUT", 10))}


def error_from_response(response: requests.Response, error_class=HostedBackendError) -> HostedBackendError:
    """Build an exception from a non-2xx hosted backend response."""
    try:
        payload = response.json()
    except ValueError:
        payload = {}

    if not isinstance(payload, dict):
        payload = {}

    message = (
        payload.get("message")
        or payload.get("msg")
        or payload.get("error_description")
        or payload.get("error")
        or response.text
        or f"HTTP {response.status_code}"
    )
    code = payload.get("code") or payload.get("error_code") or str(response.status_code)
    return error_class(str(message), code=str(code), status=response.status_code)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _quote(value: Any) -> str:
    text = _format_scalar(value)
    if any(char in _RESERVED_CHARS for char in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def encode_filter(value: Any) -> str:
    """
    Encode a filter value as a REST query operand.

    Examples:
        >>> encode_filter("abc")
        'eq.abc'
        >>> encode_filter(Op("in", ["a", "b c"]))
        'in.(a,"b c")'
        >>> encode_filter(None)
        'is.null'
    """
    if isinstance(value, Op):
        if value.operator == "in":
            return "in.(" + ",".join(_quote(item) for item in value.value) + ")"
        return f"{value.operator}.{_format_scalar(value.value)}"
    if value is None:
        return "is.null"
    return f"eq.{_format_scalar(value)}"


class PostgrestBackend(HostedBackendInterface):
    """
    Hosted backend data access over HTTP.

    Every call sends the project ``apikey`` header and a Bearer token: the
    signed-in user's access token when given, the anonymous key otherwise.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        config = load_backend_settings()
        self.base_url = f"{config['url']}/rest/v1"
        self.anon_key = config["anon_key"]
        self.timeout = config["timeout"]
        self.session = session or requests.Session()

    def _headers(self, access_token: Optional[str], returning: bool = False) -> Dict[str, str]:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    def _params(self, filters: Optional[Filters]) -> Dict[str, str]:
        return {column: encode_filter(value) for column, value in (filters or {}).items()}

    def _request(self, method: str, table: str, operation: str, **kwargs) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{table}"
        start_time = time.time()

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            backend_requests_total.labels(operation=operation, status="network_error").inc()
            logger.error(f"[BACKEND] {method} {table} failed: {e}")
            raise HostedBackendError(f"Hosted backend unreachable: {e}", code="network_error") from e
        finally:
            backend_request_duration.labels(operation=operation).observe(time.time() - start_time)

        backend_requests_total.labels(operation=operation, status=str(response.status_code)).inc()

        if not response.ok:
            error = error_from_response(response)
            logger.warning(f"[BACKEND] {method} {table} -> {response.status_code} {error.code}: {error.message}")
            raise error

        if logger.isEnabledFor(logging.DEBUG):
            rows = kwargs.get("json")
            if isinstance(rows, list):
                rows = [sanitize_payload(row) for row in rows]
            elif isinstance(rows, dict):
                rows = sanitize_payload(rows)
            logger.debug(f"[BACKEND] {method} {table} -> {response.status_code} body={rows}")

        if response.status_code == 204 or not response.content:
            return []

        data = response.json()
        if isinstance(data, dict):
            return [data]
        return data

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Filters] = None,
        order_by: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = self._params(filters)
        params["select"] = columns
        if order_by:
            params["order"] = f"{order_by}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)

        return self._request("GET", table, "select", params=params, headers=self._headers(access_token))

    def insert(
        self, table: str, rows: List[Dict[str, Any]], access_token: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        return self._request(
            "POST", table, "insert", json=rows, headers=self._headers(access_token, returning=True)
        )

    def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Filters,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("update requires at least one filter")
        return self._request(
            "PATCH",
            table,
            "update",
            params=self._params(filters),
            json=values,
            headers=self._headers(access_token, returning=True),
        )

    def delete(self, table: str, filters: Filters, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("delete requires at least one filter")
        return self._request(
            "DELETE",
            table,
            "delete",
            params=self._params(filters),
            headers=self._headers(access_token, returning=True),
        )
