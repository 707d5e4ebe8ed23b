# model/media.py
from enum import Enum
from pydantic import BaseModel


class MediaType(str, Enum):
    image = "image"
    video = "video"
    audio = "audio"

    @classmethod
    def from_mime(cls, mime_type: str) -> "MediaType":
        mime = (mime_type or "").lower()
        if mime.startswith("video/"):
            return cls.video
        if mime.startswith("audio/"):
            return cls.audio
        return cls.image


class MediaFile(BaseModel):
    id: str
    type: MediaType
    mimeType: str
    data: str  # base64, no data: prefix
    transcription: str | None = None
    analysis: str | None = None
    isProcessing: bool = False
    createdAt: int = 0


class MediaSummary(BaseModel):
    """MediaFile without its payload, for listings and analysis echoes."""

    id: str
    type: MediaType
    mimeType: str
    transcription: str | None = None
    analysis: str | None = None
    isProcessing: bool = False

    @classmethod
    def of(cls, media: MediaFile) -> "MediaSummary":
        return cls(**media.model_dump(exclude={"data", "createdAt"}))
