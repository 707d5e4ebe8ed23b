# controller/history_controller.py
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse
from config.settings import settings
from controller.controller_dependencies import get_client_id, get_history_service
from model.api import HistoryListResponse, HistoryLoadResponse
from service.history_service import HistoryService
from util.constants import InternalURIs
from util.enums import Language

history_router = APIRouter(tags=["history"])


@history_router.get(InternalURIs.HISTORY, response_model=HistoryListResponse)
async def list_history(
    client_id: str = Depends(get_client_id),
    service: HistoryService = Depends(get_history_service),
) -> HistoryListResponse:
    return HistoryListResponse(items=await service.list(client_id))


@history_router.delete(InternalURIs.HISTORY, status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(
    client_id: str = Depends(get_client_id),
    service: HistoryService = Depends(get_history_service),
) -> None:
    await service.clear(client_id)


@history_router.get(InternalURIs.HISTORY_ITEM, response_model=HistoryLoadResponse)
async def load_history_item(
    item_id: str,
    language: Language = Query(default=settings.DEFAULT_LANGUAGE),
    client_id: str = Depends(get_client_id),
    service: HistoryService = Depends(get_history_service),
) -> HistoryLoadResponse:
    return await service.load(client_id, item_id, language)


@history_router.get(InternalURIs.HISTORY_REPORT, response_class=PlainTextResponse)
async def history_report(
    item_id: str,
    language: Language = Query(default=settings.DEFAULT_LANGUAGE),
    client_id: str = Depends(get_client_id),
    service: HistoryService = Depends(get_history_service),
) -> PlainTextResponse:
    report = await service.report(client_id, item_id, language)
    return PlainTextResponse(report, media_type="text/markdown; charset=utf-8")
