"""Dependency injection."""

from tradebell.DI.container import Container

__all__ = ["Container"]
