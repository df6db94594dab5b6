"""
System prompt generation API endpoints.

Routes:
- POST /system-prompt - Generate and store a chatbot prompt for a phone number

Dependencies: docchat.api.deps, docchat.application.services.mapping_service
System role: Per-number persona HTTP API
"""

from fastapi import APIRouter, Depends

from docchat.api.deps import get_prompt_mapping_service
from docchat.application.services import MappingService
from docchat.models.mapping import SystemPromptRequest, SystemPromptResponse

router = APIRouter(tags=["system-prompt"])


@router.post("/system-prompt", response_model=SystemPromptResponse)
async def generate_system_prompt(
    request: SystemPromptRequest,
    service: MappingService = Depends(get_prompt_mapping_service),
) -> SystemPromptResponse:
    prompt = await service.generate_system_prompt(request.intent, request.phone_number)
    return SystemPromptResponse(system_prompt=prompt, intent=request.intent)
