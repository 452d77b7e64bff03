"""
Database models for the short link service.
"""

from .short_link import ShortLink

__all__ = ["ShortLink"]
