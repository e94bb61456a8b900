"""
Global error handling middleware.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from editeur.domain.exceptions import EditeurException

logger = logging.getLogger(__name__)

STATUS_CODE_MAP = {
    # Input
    "MALFORMED_INPUT": status.HTTP_400_BAD_REQUEST,
    "INVALID_AMOUNT": status.HTTP_400_BAD_REQUEST,
    # Preconditions
    "UNKNOWN_ACCOUNT": status.HTTP_404_NOT_FOUND,
    "INSUFFICIENT_FUNDS": status.HTTP_402_PAYMENT_REQUIRED,
    "INSUFFICIENT_BALANCE": status.HTTP_402_PAYMENT_REQUIRED,
    # Chain-A verification
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ADDRESS_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "NOT_MINED": status.HTTP_409_CONFLICT,
    "INSUFFICIENT_CONFIRMATIONS": status.HTTP_409_CONFLICT,
    "TRANSACTION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "ZERO_VALUE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "CHAIN_UNAVAILABLE": status.HTTP_502_BAD_GATEWAY,
    # Orchestration
    "PUBLISH_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "AMBIGUOUS_OUTCOME": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "BALANCE_OVERFLOW": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def editeur_exception_handler(
    request: Request, exc: EditeurException
) -> JSONResponse:
    """
    Handle Editeur domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500 and exc.code not in ("PUBLISH_FAILED", "AMBIGUOUS_OUTCOME"):
        # Publish errors were already logged with identity and step
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.code} {exc.message}"
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details,
        },
    )
