"""Dependency injection."""

from editeur.di.container import DIContainer

__all__ = ["DIContainer"]
