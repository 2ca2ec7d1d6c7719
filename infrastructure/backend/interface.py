"""
Hosted Backend Interface
========================

Abstract contracts for the hosted database-and-auth service the storefront
runs against. The data side mirrors the auto-generated REST interface
(select/insert/update/delete on a table); the auth side mirrors the hosted
password authentication endpoints.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

SUPPORTED_OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte", "in", "ilike", "is")

# Postgres SQLSTATE for a value that does not parse as the column type
INVALID_TEXT_REPRESENTATION = "22P02"


@dataclass(frozen=True)
class Op:
    """
    A filter operator other than plain equality.

    Attributes:
        operator: One of SUPPORTED_OPERATORS
        value: Operand (an iterable for ``in``)
    """

    operator: str
    value: Any

    def __post_init__(self):
        if self.operator not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.operator}")


def in_(values: Iterable[Any]) -> Op:
    """Filter helper: column value is one of ``values``."""
    return Op("in", list(values))


Filters = Mapping[str, Any]


@dataclass
class AuthUser:
    """Identity returned by the hosted auth service."""

    id: str
    email: str


@dataclass
class AuthSession:
    """
    Result of a sign-in or sign-up.

    A sign-up that still awaits email confirmation carries the user but no tokens.
    """

    user: AuthUser
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return bool(self.access_token)


class HostedBackendError(Exception):
    """Raised when the hosted backend rejects a request or cannot be reached."""

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    @property
    def is_invalid_value(self) -> bool:
        """The database rejected a filter value for its column type (e.g. a malformed uuid)."""
        return self.code == INVALID_TEXT_REPRESENTATION


class AuthenticationError(HostedBackendError):
    """Raised for rejected credentials or invalid tokens."""

    pass


class HostedBackendInterface(ABC):
    """
    Table-level CRUD against the hosted backend.

    Concrete implementations:
        - PostgrestBackend: HTTP REST interface
        - InMemoryBackend: dictionary-backed tables for tests and local runs

    ``filters`` maps column names to a value (equality) or an ``Op``.
    ``access_token`` is the signed-in user's token; when omitted the project's
    anonymous key is used.
    """

    @abstractmethod
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
        """
        Read rows from a table.

        Returns:
            List of row dictionaries (empty when nothing matched)

        Raises:
            HostedBackendError: If the request fails
        """
        pass

    @abstractmethod
    def insert(
        self, table: str, rows: List[Dict[str, Any]], access_token: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Insert rows and return them as stored (with generated columns).

        Raises:
            HostedBackendError: If the request fails
        """
        pass

    @abstractmethod
    def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Filters,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Update matching rows and return them.

        Raises:
            HostedBackendError: If the request fails
        """
        pass

    @abstractmethod
    def delete(self, table: str, filters: Filters, access_token: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Delete matching rows and return the deleted rows.

        Raises:
            HostedBackendError: If the request fails
        """
        pass


class AuthProviderInterface(ABC):
    """
    Password authentication against the hosted backend.

    Concrete implementations:
        - GoTrueAuthProvider: HTTP auth endpoints
        - InMemoryAuthProvider: in-process accounts for tests and local runs
    """

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Raises:
            AuthenticationError: If the credentials are rejected
        """
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthSession:
        """
        Register a new account.

        Raises:
            AuthenticationError: If the account cannot be created
        """
        pass

    @abstractmethod
    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Return the user owning ``access_token`` or None if it is not valid."""
        pass

    @abstractmethod
    def refresh_session(self, refresh_token: str) -> AuthSession:
        """
        Raises:
            AuthenticationError: If the refresh token is not valid
        """
        pass

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        pass
