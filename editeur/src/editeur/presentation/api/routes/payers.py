"""
Payer API routes.

Provides endpoints for chain-A payers:
- POST /evm/register - Open a prepaid account
- POST /evm/topup/confirm - Verify and credit a top-up
- GET /evm/balance - Query prepaid balance
- GET /evm/address - Custodial address and fee
"""

from fastapi import APIRouter, Depends, Query, status

from editeur.application.use_cases import (
    ConfirmTopUp,
    GetPayerBalance,
    RegisterPayer,
)
from editeur.config.settings import Settings
from editeur.di.container import DIContainer
from editeur.di.dependencies import (
    get_app_settings,
    get_confirm_top_up,
    get_container,
    get_get_payer_balance,
    get_register_payer,
)
from editeur.domain.value_objects import normalize_identity
from editeur.presentation.schemas.payer_schemas import (
    BalanceResponse,
    ConfirmTopUpRequest,
    ConfirmTopUpResponse,
    PublisherAddressResponse,
    RegisterPayerRequest,
    RegisterPayerResponse,
)

router = APIRouter(prefix="/evm", tags=["Payers"])


@router.post(
    "/register",
    response_model=RegisterPayerResponse,
    status_code=status.HTTP_200_OK,
    summary="Register payer",
    description="Open a zero-balance account for a chain-A address (idempotent)",
)
async def register_payer(
    request: RegisterPayerRequest,
    use_case: RegisterPayer = Depends(get_register_payer),
) -> RegisterPayerResponse:
    """
    Register payer.

    Args:
        request: Payer identity
        use_case: RegisterPayer use case (injected)

    Returns:
        Account balance and the address to send top-ups to
    """
    result = use_case.execute(request.identity)

    return RegisterPayerResponse(
        identity=result.account.identity,
        balance=str(result.account.balance),
        publisher_address=result.publisher_address,
    )


@router.post(
    "/topup/confirm",
    response_model=ConfirmTopUpResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Confirm top-up",
    description=(
        "Verify a chain-A transfer to the publisher address and credit it. "
        "Resubmitting a credited transaction returns alreadyCredited."
    ),
)
async def confirm_top_up(
    request: ConfirmTopUpRequest,
    use_case: ConfirmTopUp = Depends(get_confirm_top_up),
) -> ConfirmTopUpResponse:
    """
    Confirm top-up.

    Args:
        request: Payer identity, transaction hash, optional depth
        use_case: ConfirmTopUp use case (injected)

    Returns:
        Credited amount and new balance, or alreadyCredited
    """
    result = await use_case.execute(
        identity=request.identity,
        tx_id=request.tx_id,
        min_confirmations=request.min_confirmations,
    )

    if result.already_credited:
        return ConfirmTopUpResponse(
            tx_id=result.tx_id,
            balance=str(result.balance),
            already_credited=True,
        )

    return ConfirmTopUpResponse(
        tx_id=result.tx_id,
        balance=str(result.balance),
        credited_amount=str(result.credited_amount),
        confirmations=result.confirmations,
        from_address=result.from_address,
        to_address=result.to_address,
    )


@router.get(
    "/balance",
    response_model=BalanceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get balance",
)
async def get_balance(
    identity: str = Query(..., description="Payer chain-A address"),
    use_case: GetPayerBalance = Depends(get_get_payer_balance),
) -> BalanceResponse:
    """Get prepaid balance of a registered payer."""
    balance = use_case.execute(identity)

    return BalanceResponse(
        identity=normalize_identity(identity),
        balance=str(balance),
    )


@router.get(
    "/address",
    response_model=PublisherAddressResponse,
    status_code=status.HTTP_200_OK,
    summary="Get publisher address",
)
async def get_publisher_address(
    container: DIContainer = Depends(get_container),
    settings: Settings = Depends(get_app_settings),
) -> PublisherAddressResponse:
    """Custodial chain-A address and publish fee."""
    return PublisherAddressResponse(
        publisher_address=container.publisher_address,
        fee=str(settings.STORE_FEE_WEI),
    )
