"""
API schemas for health endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Service identity and reachability."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., examples=["healthy"])
    service: str
    version: str
    publisher_evm_address: str = Field(..., alias="publisherEvmAddress")
    sui_owner: str = Field(..., alias="suiOwner")
    evm_chain_id: Optional[int] = Field(default=None, alias="evmChainId")
    sui_network: str = Field(..., alias="suiNetwork")
    store_fee_wei: str = Field(..., alias="storeFeeWei")
