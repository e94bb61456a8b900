"""
Health check routes.
"""

from fastapi import APIRouter, Depends

from editeur import __version__
from editeur.application.use_cases import GetServiceInfo
from editeur.di.dependencies import get_get_service_info
from editeur.presentation.schemas.health_schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    use_case: GetServiceInfo = Depends(get_get_service_info),
) -> HealthResponse:
    """
    Service identity and chain-A reachability.

    Reports "degraded" when chain A does not answer the chain-id probe.
    """
    info = await use_case.execute()

    return HealthResponse(
        status=info.status,
        service="editeur",
        version=__version__,
        publisher_evm_address=info.publisher_address,
        sui_owner=info.sui_owner,
        evm_chain_id=info.chain_id,
        sui_network=info.sui_network,
        store_fee_wei=str(info.store_fee),
    )


@router.get("/health/live")
async def liveness():
    """Liveness probe (no external calls)."""
    return {"status": "alive"}
