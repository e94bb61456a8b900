"""
Monitoring infrastructure.
"""

from editeur.infrastructure.monitoring.logger import (
    JSONFormatter,
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
]
