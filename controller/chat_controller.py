# controller/chat_controller.py
from fastapi import APIRouter, Depends, Query
from config.settings import settings
from controller.controller_dependencies import get_chat_service, rate_limit
from model.api import ChatRequest, ChatTranscriptResponse
from model.chat import ChatMessage
from service.chat_service import ChatService
from util.constants import InternalURIs
from util.enums import Language

chat_router = APIRouter(tags=["chat"])


@chat_router.get(InternalURIs.CHAT, response_model=ChatTranscriptResponse)
async def get_transcript(
    chat_id: str,
    language: Language = Query(default=settings.DEFAULT_LANGUAGE),
    service: ChatService = Depends(get_chat_service),
) -> ChatTranscriptResponse:
    messages = await service.transcript(chat_id, language)
    return ChatTranscriptResponse(chatId=chat_id, messages=messages)


@chat_router.post(
    InternalURIs.CHAT_MESSAGES,
    response_model=ChatMessage,
    dependencies=[Depends(rate_limit)],
)
async def send_message(
    chat_id: str,
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatMessage:
    return await service.send(chat_id, payload.message, payload.language)
