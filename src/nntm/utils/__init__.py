"""Utility helpers."""

from .datetime import today_str

__all__ = ["today_str"]
