# controller/controller_dependencies.py
from fastapi import File, Form, Header, HTTPException, Request, Response, UploadFile
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.chat_repository import ChatRepository
from repository.history_repository import HistoryRepository
from repository.media_repository import MediaRepository
from repository.usage_repository import UsageRepository
from service.analysis_service import AnalysisService
from service.chat_service import ChatService
from service.history_service import HistoryService
from service.media_service import MediaService
from service.usage_service import UsageService
from util.constants import Headers, MAX_CLIENT_ID_LENGTH
from util.enums import Language
from util.translations import translate

_limiter = RateLimiter(times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS)


async def rate_limit(request: Request, response: Response) -> None:
    if settings.RATE_LIMIT_ENABLED:
        await _limiter(request, response)


def real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get(Headers.FORWARDED_FOR)
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def get_client_id(
    request: Request, x_client_id: str | None = Header(default=None)
) -> str:
    """
    Whose usage counter and history a request touches: the X-Client-Id the
    front end generated once and keeps, else the caller's IP.
    """
    client_id = (x_client_id or "").strip()
    if not client_id:
        return f"ip:{real_ip(request)}"
    if len(client_id) > MAX_CLIENT_ID_LENGTH or not client_id.isprintable():
        raise HTTPException(status_code=400, detail="Invalid client id")
    return client_id


def get_usage_service() -> UsageService:
    return UsageService(UsageRepository())


def get_chat_service() -> ChatService:
    return ChatService(ChatRepository())


def get_media_service() -> MediaService:
    return MediaService(MediaRepository())


def get_history_service() -> HistoryService:
    return HistoryService(HistoryRepository(), get_chat_service())


def get_analysis_service() -> AnalysisService:
    _chats = get_chat_service()
    _service = AnalysisService(
        usage=get_usage_service(),
        media=get_media_service(),
        history=HistoryService(HistoryRepository(), _chats),
        chats=_chats,
    )
    return _service


async def enforce_max_upload_size(
    request: Request,
    file: UploadFile = File(...),
    language: Language = Form(default=settings.DEFAULT_LANGUAGE),
) -> UploadFile:
    MAX_BYTES = settings.MAX_FILE_MB * 1024 * 1024
    too_large = HTTPException(
        status_code=413,
        detail={
            "ok": False,
            "error": "file_too_large",
            "maxMb": settings.MAX_FILE_MB,
            "message": translate(language, "errorMediaSize"),
        },
    )

    # Fast pre-check via Content-Length if present
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > MAX_BYTES + 64 * 1024:
        raise too_large

    # Hard cap while reading (works even if no Content-Length)
    blob = await file.read(MAX_BYTES + 1)
    if len(blob) > MAX_BYTES:
        raise too_large

    # Reset so downstream can re-read file stream
    await file.seek(0)
    return file
