"""Dependency resolution over installed distribution metadata."""

from .load import resolve_packages

__all__ = ["resolve_packages"]
