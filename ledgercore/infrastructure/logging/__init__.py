"""Logging helpers package."""

from .logger import get_app_logger, get_audit_logger

__all__ = ["get_app_logger", "get_audit_logger"]
