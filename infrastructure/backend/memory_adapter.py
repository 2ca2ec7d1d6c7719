"""
In-Memory Backend
=================

Dictionary-backed implementations of HostedBackendInterface and
AuthProviderInterface for testing and local development.

Instead of calling the hosted service these adapters:
    - Keep tables as lists of row dictionaries
    - Generate ``id`` and ``created_at`` on insert like the hosted tables do
    - Apply the same filter operators, ordering and limits
"""

import logging
import re
import secrets
import threading
import uuid
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from django.contrib.auth.hashers import check_password, make_password
from django.utils import timezone

from .interface import (
    AuthenticationError,
    AuthProviderInterface,
    AuthSession,
    AuthUser,
    Filters,
    HostedBackendInterface,
    Op,
)

logger = logging.getLogger(__name__)


def _normalize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _compare(actual: Any, expected: Any) -> int:
    try:
        left, right = Decimal(str(actual)), Decimal(str(expected))
    except (InvalidOperation, ValueError):
        left, right = str(actual), str(expected)
    return (left > right) - (left < right)


def _like_to_regex(pattern: str) -> re.Pattern:
    parts = [re.escape(part) for part in re.split(r"[%*]", pattern)]
    return re.compile("^" + ".*".join(parts) + "$", re.IGNORECASE | re.DOTALL)


def _apply_operator(op: Op, actual: Any) -> bool:
    if op.operator == "is":
        return actual is op.value
    if op.operator == "in":
        return _normalize(actual) in {_normalize(item) for item in op.value}
    if actual is None:
        return False
    if op.operator == "eq":
        return _normalize(actual) == _normalize(op.value)
    if op.operator == "neq":
        return _normalize(actual) != _normalize(op.value)
    if op.operator == "ilike":
        return bool(_like_to_regex(str(op.value)).match(str(actual)))

    result = _compare(actual, op.value)
    return {"gt": result > 0, "gte": result >= 0, "lt": result < 0, "lte": result <= 0}[op.operator]


def matches(row: Dict[str, Any], filters: Optional[Filters]) -> bool:
    """Return True if ``row`` satisfies every filter."""
    for column, expected in (filters or {}).items():
        actual = row.get(column)
        if isinstance(expected, Op):
            if not _apply_operator(expected, actual):
                return False
        elif expected is None:
            if actual is not None:
                return False
        elif actual is None or _normalize(actual) != _normalize(expected):
            return False
    return True


class InMemoryBackend(HostedBackendInterface):
    """
    In-process tables for testing and development.

    Useful for:
        - Unit and integration tests
        - Running the storefront without a hosted project
    """

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {name: list(rows) for name, rows in (tables or {}).items()}
        self._lock = threading.Lock()
        self._last_created_at = None

    def _next_timestamp(self):
        now = timezone.now()
        if self._last_created_at is not None and now <= self._last_created_at:
            now = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = now
        return now

    @staticmethod
    def _project(row: Dict[str, Any], columns: str) -> Dict[str, Any]:
        if columns.strip() == "*":
            return dict(row)
        names = [name.strip() for name in columns.split(",") if name.strip()]
        return {name: row.get(name) for name in names}

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
        with self._lock:
            rows = [row for row in self.tables.get(table, []) if matches(row, filters)]

        if order_by:
            present = [row for row in rows if row.get(order_by) is not None]
            missing = [row for row in rows if row.get(order_by) is None]
            present.sort(key=lambda row: row[order_by], reverse=not ascending)
            rows = present + missing

        if limit is not None:
            rows = rows[:limit]

        return [self._project(row, columns) for row in rows]

    def insert(
        self, table: str, rows: List[Dict[str, Any]], access_token: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        stored = []
        with self._lock:
            for row in rows:
                record = dict(row)
                record.setdefault("id", str(uuid.uuid4()))
                record.setdefault("created_at", self._next_timestamp().isoformat())
                self.tables.setdefault(table, []).append(record)
                stored.append(dict(record))

        logger.debug(f"[MEMORY BACKEND] insert {table}: {len(stored)} rows")
        return stored

    def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Filters,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("update requires at least one filter")

        updated = []
        with self._lock:
            for row in self.tables.get(table, []):
                if matches(row, filters):
                    row.update(values)
                    updated.append(dict(row))

        logger.debug(f"[MEMORY BACKEND] update {table}: {len(updated)} rows")
        return updated

    def delete(self, table: str, filters: Filters, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        if not filters:
            raise ValueError("delete requires at least one filter")

        with self._lock:
            rows = self.tables.get(table, [])
            deleted = [dict(row) for row in rows if matches(row, filters)]
            self.tables[table] = [row for row in rows if not matches(row, filters)]

        logger.debug(f"[MEMORY BACKEND] delete {table}: {len(deleted)} rows")
        return deleted


class InMemoryAuthProvider(AuthProviderInterface):
    """
    In-process accounts and opaque tokens.

    Args:
        require_confirmation: When True, sign-ups return no tokens and sign-in
            is refused until ``confirm_email`` is called.
    """

    def __init__(self, require_confirmation: bool = False):
        self.require_confirmation = require_confirmation
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.access_tokens: Dict[str, str] = {}
        self.refresh_tokens: Dict[str, str] = {}

    def _account_by_id(self, user_id: str) -> Dict[str, Any]:
        return next(account for account in self.accounts.values() if account["id"] == user_id)

    def _issue_session(self, account: Dict[str, Any]) -> AuthSession:
        access_token = secrets.token_urlsafe(32)
        refresh_token = secrets.token_urlsafe(32)
        self.access_tokens[access_token] = account["id"]
        self.refresh_tokens[refresh_token] = account["id"]
        return AuthSession(
            user=AuthUser(id=account["id"], email=account["email"]),
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=3600,
        )

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get((email or "").lower())
        if account is None or not check_password(password, account["password"]):
            raise AuthenticationError("Invalid login credentials", code="invalid_credentials", status=400)
        if not account["confirmed"]:
            raise AuthenticationError("Email not confirmed", code="email_not_confirmed", status=400)
        return self._issue_session(account)

    def sign_up(self, email: str, password: str) -> AuthSession:
        key = (email or "").lower()
        if key in self.accounts:
            raise AuthenticationError("User already registered", code="user_already_exists", status=422)

        account = {
            "id": str(uuid.uuid4()),
            "email": key,
            "password": make_password(password),
            "confirmed": not self.require_confirmation,
        }
        self.accounts[key] = account

        if self.require_confirmation:
            return AuthSession(user=AuthUser(id=account["id"], email=account["email"]))
        return self._issue_session(account)

    def confirm_email(self, email: str) -> None:
        self.accounts[email.lower()]["confirmed"] = True

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        user_id = self.access_tokens.get(access_token)
        if user_id is None:
            return None
        account = self._account_by_id(user_id)
        return AuthUser(id=account["id"], email=account["email"])

    def refresh_session(self, refresh_token: str) -> AuthSession:
        user_id = self.refresh_tokens.pop(refresh_token, None)
        if user_id is None:
            raise AuthenticationError("Invalid Refresh Token", code="refresh_token_not_found", status=400)
        return self._issue_session(self._account_by_id(user_id))

    def sign_out(self, access_token: str) -> None:
        self.access_tokens.pop(access_token, None)
