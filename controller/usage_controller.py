# controller/usage_controller.py
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_client_id, get_usage_service
from model.api import UsageResponse
from service.usage_service import UsageService
from util.constants import InternalURIs
from util.enums import Language
from util.translations import bundle

usage_router = APIRouter(tags=["usage"])


@usage_router.get(InternalURIs.USAGE, response_model=UsageResponse)
async def get_usage(
    client_id: str = Depends(get_client_id),
    service: UsageService = Depends(get_usage_service),
) -> UsageResponse:
    return await service.status(client_id)


@usage_router.get(InternalURIs.TRANSLATIONS)
async def get_translations(language: Language) -> dict:
    return bundle(language)
