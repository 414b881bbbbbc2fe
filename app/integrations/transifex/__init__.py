"""Transifex integration module."""

from .client import TransifexClient

__all__ = ["TransifexClient"]
