"""Shared helpers for the storefront project."""

from .logging_utils import mask_value, sanitize_payload

__all__ = ["mask_value", "sanitize_payload"]
