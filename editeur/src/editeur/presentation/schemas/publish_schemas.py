"""
API schemas for publishing.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PublishTextRequest(BaseModel):
    """JSON body for publishing text content."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(..., description="Payer chain-A address")
    text: str = Field(..., description="Text content to publish")
    filename: Optional[str] = Field(default=None, examples=["note.txt"])
    storage_duration: Optional[int] = Field(
        default=None,
        alias="storageDuration",
        description="Storage duration in epochs",
    )
    immutable: Optional[bool] = Field(
        default=None,
        description="Register the blob as non-deletable",
    )


class PublishResponse(BaseModel):
    """Response schema for a successful publish."""

    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(..., alias="contentId", description="Blob id")
    files: List[Dict[str, Any]] = Field(default_factory=list)
    filename: str
    storage_duration: int = Field(..., alias="storageDuration")
    immutable: bool
    fee_charged: str = Field(..., alias="feeCharged")
    remaining_balance: str = Field(..., alias="remainingBalance")
    register_digest: Optional[str] = Field(default=None, alias="registerDigest")
    certify_digest: Optional[str] = Field(default=None, alias="certifyDigest")
