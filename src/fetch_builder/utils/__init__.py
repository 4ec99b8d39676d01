"""Utility modules."""

from .sanitizer import mask_headers, is_sensitive_header

__all__ = ["mask_headers", "is_sensitive_header"]
