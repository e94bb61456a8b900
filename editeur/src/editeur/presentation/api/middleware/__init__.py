"""API middleware."""

from editeur.presentation.api.middleware.error_handler import (
    editeur_exception_handler,
)
from editeur.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from editeur.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "editeur_exception_handler",
    "MetricsMiddleware",
    "RequestIDMiddleware",
]
