# controller/media_controller.py
from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    Form,
    Query,
    UploadFile,
    status,
)
from config.settings import settings
from controller.controller_dependencies import (
    enforce_max_upload_size,
    get_client_id,
    get_media_service,
    rate_limit,
)
from model.api import DictationResponse, MediaDraftResponse
from model.media import MediaSummary, MediaType
from service.media_service import MediaService
from util.constants import InternalURIs
from util.enums import Language

media_router = APIRouter(dependencies=[Depends(rate_limit)], tags=["media"])


@media_router.post(
    InternalURIs.MEDIA,
    response_model=MediaSummary,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_max_upload_size)],
)
async def upload_media(
    background: BackgroundTasks,
    file: UploadFile = File(...),
    language: Language = Form(default=settings.DEFAULT_LANGUAGE),
    client_id: str = Depends(get_client_id),
    service: MediaService = Depends(get_media_service),
) -> MediaSummary:
    media = await service.add_file(client_id, file, language)
    if media.type == MediaType.audio:
        background.add_task(service.process_audio, client_id, media.id)
    return MediaSummary.of(media)


@media_router.get(InternalURIs.MEDIA, response_model=MediaDraftResponse)
async def get_media_draft(
    client_id: str = Depends(get_client_id),
    service: MediaService = Depends(get_media_service),
) -> MediaDraftResponse:
    return await service.draft(client_id)


@media_router.delete(InternalURIs.MEDIA_ITEM, status_code=status.HTTP_204_NO_CONTENT)
async def remove_media(
    media_id: str,
    language: Language = Query(default=settings.DEFAULT_LANGUAGE),
    client_id: str = Depends(get_client_id),
    service: MediaService = Depends(get_media_service),
) -> None:
    await service.remove(client_id, media_id, language)


@media_router.delete(InternalURIs.MEDIA, status_code=status.HTTP_204_NO_CONTENT)
async def reset_media(
    client_id: str = Depends(get_client_id),
    service: MediaService = Depends(get_media_service),
) -> None:
    await service.reset(client_id)


@media_router.post(
    InternalURIs.DICTATION,
    response_model=DictationResponse,
    dependencies=[Depends(enforce_max_upload_size)],
)
async def dictate(
    file: UploadFile = File(...),
    text: str = Form(default=""),
    language: Language = Form(default=settings.DEFAULT_LANGUAGE),
    service: MediaService = Depends(get_media_service),
) -> DictationResponse:
    return DictationResponse(text=await service.dictate(file, text, language))
