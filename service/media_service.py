# service/media_service.py
import base64
import logging
import httpx
from fastapi import UploadFile
from config.settings import settings
from core.gemini_client import generate_content, inline_part, text_part
from core.response_parser import parse_json_value
from model.api import MediaDraftResponse
from model.media import MediaFile, MediaSummary, MediaType
from repository.media_repository import MediaRepository
from util import functions
from util.enums import AnalysisStage, ErrorMessage, Language
from util.errors import localized_error

logger = logging.getLogger(__name__)


def _text_or(value: object, placeholder: str) -> str:
    return value.strip() if isinstance(value, str) and value.strip() else placeholder


class MediaService:
    """
    Attachments for the analysis being composed, plus the two audio helpers:
    pre-analysis of uploaded audio evidence and dictation into the text box.
    """

    def __init__(self, media: MediaRepository) -> None:
        self._media = media

    async def add_file(
        self, client_id: str, file: UploadFile, language: Language
    ) -> MediaFile:
        """
        Store an uploaded file base64-encoded in the client's draft.
        Audio comes back with isProcessing=True; process_audio() finishes it.
        """
        mime_type = file.content_type or "application/octet-stream"
        media_type = MediaType.from_mime(mime_type)
        if media_type == MediaType.audio and not settings.GEMINI_API_KEY:
            raise localized_error(ErrorMessage.MISSING_API_KEY, language)

        data = await file.read()
        await file.seek(0)
        media = MediaFile(
            id=functions.random_id(7),
            type=media_type,
            mimeType=mime_type,
            data=base64.b64encode(data).decode("ascii"),
            isProcessing=media_type == MediaType.audio,
            createdAt=functions.now_ms(),
        )
        await self._media.put(client_id, media)
        logger.info(
            "media.add client=%s media=%s type=%s bytes=%d",
            client_id,
            media.id,
            media.type.value,
            len(data),
        )
        return media

    async def process_audio(self, client_id: str, media_id: str) -> None:
        """
        Transcribe and forensically pre-check one audio file. A failed call
        leaves analysis="Processing failed." so the analysis prompt can say
        so. Whatever happens the file leaves the processing state.
        """
        media = await self._media.get(client_id, media_id)
        if media is None or media.type != MediaType.audio:
            return

        try:
            reply = await generate_content(
                api_key=settings.GEMINI_API_KEY or "",
                model=settings.FAST_MODEL,
                parts=[
                    inline_part(media.mimeType, media.data),
                    text_part(settings.AUDIO_ANALYSIS_PROMPT),
                ],
                response_json=True,
                timeout=settings.FAST_TIMEOUT_SECONDS,
            )
            parsed = parse_json_value(reply.text or "{}")
            if not isinstance(parsed, dict):
                parsed = {}
            media.transcription = _text_or(parsed.get("transcript"), "No transcript generated.")
            media.analysis = _text_or(parsed.get("analysis"), "No analysis available.")
            logger.info("media.audio.ok client=%s media=%s", client_id, media_id)
        except (httpx.HTTPError, ValueError) as e:
            media.analysis = "Processing failed."
            logger.error(
                "media.audio.error client=%s media=%s err=%s",
                client_id,
                media_id,
                type(e).__name__,
            )
        finally:
            media.isProcessing = False
            if media.analysis is None:
                media.analysis = "Processing failed."
            # The file may have been removed while we were waiting on the model
            if await self._media.get(client_id, media_id) is not None:
                await self._media.put(client_id, media)

    async def draft(self, client_id: str) -> MediaDraftResponse:
        files = await self._media.all(client_id)
        processing = any(f.isProcessing for f in files)
        return MediaDraftResponse(
            stage=AnalysisStage.UPLOADING if processing else AnalysisStage.IDLE,
            files=[MediaSummary.of(f) for f in files],
        )

    async def resolve(
        self, client_id: str, media_ids: list[str], language: Language
    ) -> list[MediaFile]:
        """Look up the files an analysis refers to, in request order."""
        out: list[MediaFile] = []
        for media_id in media_ids:
            media = await self._media.get(client_id, media_id)
            if media is None:
                raise localized_error(ErrorMessage.MEDIA_NOT_FOUND, language)
            if media.isProcessing:
                raise localized_error(ErrorMessage.MEDIA_PROCESSING, language)
            out.append(media)
        return out

    async def remove(self, client_id: str, media_id: str, language: Language) -> None:
        if not await self._media.delete(client_id, media_id):
            raise localized_error(ErrorMessage.MEDIA_NOT_FOUND, language)
        logger.info("media.remove client=%s media=%s", client_id, media_id)

    async def reset(self, client_id: str) -> None:
        await self._media.clear(client_id)
        logger.info("media.reset client=%s", client_id)

    async def dictate(self, file: UploadFile, text: str, language: Language) -> str:
        """Transcribe a recording and append it to the text typed so far."""
        if not settings.GEMINI_API_KEY:
            raise localized_error(ErrorMessage.MISSING_API_KEY, language)

        data = await file.read()
        mime_type = file.content_type or "audio/webm"
        try:
            reply = await generate_content(
                api_key=settings.GEMINI_API_KEY,
                model=settings.FAST_MODEL,
                parts=[
                    inline_part(mime_type, base64.b64encode(data).decode("ascii")),
                    text_part(settings.DICTATION_PROMPT),
                ],
                timeout=settings.FAST_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as e:
            logger.error("dictation.error err=%s", type(e).__name__)
            raise localized_error(ErrorMessage.DICTATION_FAILED, language)

        transcript = (reply.text or "").strip()
        logger.info("dictation.ok bytes=%d chars=%d", len(data), len(transcript))
        return f"{text} {transcript}" if text else transcript
