from .auth_service import MIN_PASSWORD_LENGTH, AuthService
from .results import LoginResult, RegisterResult

__all__ = ["AuthService", "LoginResult", "RegisterResult", "MIN_PASSWORD_LENGTH"]
