"""
API schemas for payer operations.

Request and response models for the /evm endpoints. Amounts are wei,
serialized as decimal strings to preserve precision.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ADDRESS_EXAMPLE = "0x8ba1f109551bd432803012645ac136ddd64dba72"
TX_EXAMPLE = "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060"


class RegisterPayerRequest(BaseModel):
    """Request schema for payer registration."""

    identity: str = Field(
        ...,
        description="Payer chain-A address",
        examples=[ADDRESS_EXAMPLE],
    )


class RegisterPayerResponse(BaseModel):
    """Response schema for payer registration."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(..., description="Normalized payer address")
    balance: str = Field(..., description="Prepaid balance in wei", examples=["0"])
    publisher_address: str = Field(
        ...,
        alias="publisherAddress",
        description="Custodial address to send top-ups to",
    )


class ConfirmTopUpRequest(BaseModel):
    """Request schema for top-up confirmation."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(
        ...,
        description="Payer chain-A address",
        examples=[ADDRESS_EXAMPLE],
    )
    tx_id: str = Field(
        ...,
        alias="txId",
        description="Chain-A transaction hash",
        examples=[TX_EXAMPLE],
    )
    min_confirmations: Optional[int] = Field(
        default=None,
        alias="minConfirmations",
        description="Required confirmation depth (server default if omitted)",
        examples=[1],
    )


class ConfirmTopUpResponse(BaseModel):
    """
    Response schema for top-up confirmation.

    Either a fresh credit (creditedAmount, confirmations, from, to) or
    alreadyCredited with the unchanged balance.
    """

    model_config = ConfigDict(populate_by_name=True)

    tx_id: str = Field(..., alias="txId")
    balance: str = Field(..., description="Balance after this call in wei")
    already_credited: bool = Field(default=False, alias="alreadyCredited")
    credited_amount: Optional[str] = Field(default=None, alias="creditedAmount")
    confirmations: Optional[int] = Field(default=None)
    from_address: Optional[str] = Field(default=None, alias="from")
    to_address: Optional[str] = Field(default=None, alias="to")


class BalanceResponse(BaseModel):
    """Response schema for balance query."""

    identity: str = Field(..., description="Normalized payer address")
    balance: str = Field(..., description="Prepaid balance in wei")


class PublisherAddressResponse(BaseModel):
    """Response schema for the custodial address query."""

    model_config = ConfigDict(populate_by_name=True)

    publisher_address: str = Field(..., alias="publisherAddress")
    fee: str = Field(..., description="Publish fee in wei")
