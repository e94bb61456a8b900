"""API routes."""

from editeur.presentation.api.routes import health, payers, publish

__all__ = ["health", "payers", "publish"]
