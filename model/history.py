# model/history.py
from pydantic import BaseModel
from model.verification import Source, VerificationResult


class HistoryItem(BaseModel):
    id: str
    timestamp: int  # epoch ms
    result: VerificationResult
    previewText: str
    sources: list[Source] = []
