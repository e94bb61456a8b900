"""
Publish API routes.

Provides endpoint for publishing content:
- POST /publish - Charge the fee and store content on the storage network

Two body forms are accepted:
- application/octet-stream: raw bytes, metadata in the query string
- application/json: {identity, text, filename?, storageDuration?, immutable?}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import ValidationError

from editeur.application.use_cases import PublishContent
from editeur.config.settings import Settings
from editeur.di.dependencies import get_app_settings, get_publish_content
from editeur.domain.entities.publication import ContentMetadata
from editeur.domain.exceptions import MalformedInputError
from editeur.presentation.schemas.publish_schemas import (
    PublishResponse,
    PublishTextRequest,
)

router = APIRouter(tags=["Publish"])

RAW_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain"

_OPENAPI_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            RAW_CONTENT_TYPE: {"schema": {"type": "string", "format": "binary"}},
            "application/json": {
                "schema": PublishTextRequest.model_json_schema(by_alias=True)
            },
        },
    }
}


def _build_metadata(
    settings: Settings,
    filename: Optional[str],
    storage_duration: Optional[int],
    immutable: Optional[bool],
    content_type: str,
) -> ContentMetadata:
    """Apply defaults and bounds to caller-supplied metadata."""
    epochs = storage_duration
    if epochs is None:
        epochs = settings.DEFAULT_STORAGE_EPOCHS
    if not 1 <= epochs <= settings.MAX_STORAGE_EPOCHS:
        raise MalformedInputError(
            "storageDuration",
            f"must be between 1 and {settings.MAX_STORAGE_EPOCHS} epochs",
        )

    try:
        return ContentMetadata(
            filename=filename if filename is not None else "file.txt",
            storage_epochs=epochs,
            immutable=True if immutable is None else immutable,
            content_type=content_type,
        )
    except ValueError as e:
        raise MalformedInputError("metadata", str(e)) from e


async def _read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise MalformedInputError("content", f"exceeds {limit} bytes")

    body = await request.body()
    if len(body) > limit:
        raise MalformedInputError("content", f"exceeds {limit} bytes")
    return body


@router.post(
    "/publish",
    response_model=PublishResponse,
    status_code=status.HTTP_200_OK,
    summary="Publish content",
    description=(
        "Charge the publish fee from the payer's prepaid balance and store "
        "the content. The fee is not refunded if a later step fails."
    ),
    openapi_extra=_OPENAPI_BODY,
)
async def publish(
    request: Request,
    identity: Optional[str] = Query(None, description="Payer (raw bodies only)"),
    filename: Optional[str] = Query(None),
    storage_duration: Optional[int] = Query(None, alias="storageDuration"),
    immutable: Optional[bool] = Query(None),
    use_case: PublishContent = Depends(get_publish_content),
    settings: Settings = Depends(get_app_settings),
) -> PublishResponse:
    """
    Publish content.

    Args:
        request: Raw request (body read according to its content type)
        identity: Payer address for raw bodies
        filename: Stored file name for raw bodies
        storage_duration: Epochs for raw bodies
        immutable: Non-deletable flag for raw bodies
        use_case: PublishContent use case (injected)
        settings: Application settings (injected)

    Returns:
        Content id, stored files and remaining balance
    """
    body = await _read_body(request, settings.MAX_CONTENT_BYTES)
    media_type = request.headers.get("content-type", "").split(";")[0].strip()

    if media_type == "application/json":
        try:
            payload = PublishTextRequest.model_validate_json(body)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "body"
            raise MalformedInputError(field, error["msg"]) from e

        identity = payload.identity
        content = payload.text.encode("utf-8")
        metadata = _build_metadata(
            settings,
            payload.filename,
            payload.storage_duration,
            payload.immutable,
            TEXT_CONTENT_TYPE,
        )
    else:
        if not identity:
            raise MalformedInputError(
                "identity", "query parameter is required for raw bodies"
            )
        content = body
        metadata = _build_metadata(
            settings, filename, storage_duration, immutable, RAW_CONTENT_TYPE
        )

    receipt = await use_case.execute(identity, content, metadata)

    return PublishResponse(**receipt.to_dict())
