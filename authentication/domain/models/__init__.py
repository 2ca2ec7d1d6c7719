from .user import StorefrontUser

__all__ = ["StorefrontUser"]
