# model/api.py
from pydantic import BaseModel
from model.chat import ChatMessage
from model.history import HistoryItem
from model.media import MediaSummary
from model.verification import Source, VerificationResult
from util.enums import AnalysisStage, Language


class AnalyzeRequest(BaseModel):
    text: str = ""
    url: str = ""
    mediaIds: list[str] = []
    language: Language = Language.ES


class AnalyzedInput(BaseModel):
    text: str = ""
    url: str = ""
    media: list[MediaSummary] = []


class AnalysisResponse(BaseModel):
    id: str
    result: VerificationResult
    sources: list[Source]
    previewText: str
    chatId: str
    input: AnalyzedInput = AnalyzedInput()


class HistoryLoadResponse(BaseModel):
    item: HistoryItem
    chatId: str


class HistoryListResponse(BaseModel):
    items: list[HistoryItem]


class MediaDraftResponse(BaseModel):
    stage: AnalysisStage
    files: list[MediaSummary]


class DictationResponse(BaseModel):
    text: str


class ChatRequest(BaseModel):
    message: str = ""
    language: Language = Language.ES


class ChatTranscriptResponse(BaseModel):
    chatId: str
    messages: list[ChatMessage]


class UsageResponse(BaseModel):
    date: str
    count: int
    limit: int
    remaining: int
