"""
Response Serializers for Storefront API Documentation

These serializers describe error payloads for OpenAPI schema generation.
"""

from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    error = serializers.CharField(help_text="Error code identifier", required=False)
