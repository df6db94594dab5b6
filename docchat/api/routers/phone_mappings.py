"""
Phone mapping API endpoints.

Routes:
- GET /phone-mappings - List mappings (filter by phone_number, file_id)
- POST /phone-mappings - Map a phone number to a source
- DELETE /phone-mappings?id= - Delete a mapping

Dependencies: docchat.api.deps, docchat.application.services.mapping_service
System role: Phone mapping HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException, status

from docchat.api.deps import get_mapping_service
from docchat.application.services import MappingService
from docchat.core.exceptions import InvalidArgumentError
from docchat.models.mapping import (
    PhoneMappingCreate,
    PhoneMappingListResponse,
    PhoneMappingResponse,
)

router = APIRouter(prefix="/phone-mappings", tags=["phone-mappings"])


@router.get("", response_model=PhoneMappingListResponse)
async def list_mappings(
    phone_number: str | None = None,
    file_id: str | None = None,
    service: MappingService = Depends(get_mapping_service),
) -> PhoneMappingListResponse:
    """List mappings, newest first."""
    mappings = await service.list_mappings(phone_number=phone_number, file_id=file_id)
    return PhoneMappingListResponse(mappings=[PhoneMappingResponse.from_mapping(m) for m in mappings])


@router.post("", response_model=PhoneMappingResponse)
async def create_mapping(
    request: PhoneMappingCreate,
    service: MappingService = Depends(get_mapping_service),
) -> PhoneMappingResponse:
    """
    Map a phone number to a source.

    Raises:
        HTTPException(400): Missing phone_number or file_id
        HTTPException(409): Mapping already exists
    """
    mapping = await service.create_mapping(request.phone_number, request.file_id)
    return PhoneMappingResponse.from_mapping(mapping)


@router.delete("")
async def delete_mapping(
    id: str | None = None,
    service: MappingService = Depends(get_mapping_service),
) -> dict:
    """Delete one mapping by id."""
    if not id:
        raise InvalidArgumentError("Mapping ID is required", field="id")
    if not await service.delete_mapping(id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Mapping {id} not found")
    return {"success": True}
