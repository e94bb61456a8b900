"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container stored
on the application state.
"""

from fastapi import Depends, Request

from editeur.application.use_cases import (
    ConfirmTopUp,
    GetPayerBalance,
    GetServiceInfo,
    PublishContent,
    RegisterPayer,
)
from editeur.config.settings import Settings
from editeur.di.container import DIContainer

# ================================================================
# Container Dependencies
# ================================================================


def get_container(request: Request) -> DIContainer:
    """Get DI container of the running application."""
    return request.app.state.container


def get_app_settings(container: DIContainer = Depends(get_container)) -> Settings:
    """Get settings the application was created with."""
    return container.settings


# ================================================================
# Use Case Dependencies
# ================================================================


def get_register_payer(
    container: DIContainer = Depends(get_container),
) -> RegisterPayer:
    """Get RegisterPayer use case dependency."""
    return container.register_payer


def get_confirm_top_up(
    container: DIContainer = Depends(get_container),
) -> ConfirmTopUp:
    """Get ConfirmTopUp use case dependency."""
    return container.confirm_top_up


def get_get_payer_balance(
    container: DIContainer = Depends(get_container),
) -> GetPayerBalance:
    """Get GetPayerBalance use case dependency."""
    return container.get_payer_balance


def get_publish_content(
    container: DIContainer = Depends(get_container),
) -> PublishContent:
    """Get PublishContent use case dependency."""
    return container.publish_content


def get_get_service_info(
    container: DIContainer = Depends(get_container),
) -> GetServiceInfo:
    """Get GetServiceInfo use case dependency."""
    return container.get_service_info
