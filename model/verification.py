# model/verification.py
import math
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator


class Verdict(str, Enum):
    CREDIBLE = "CREDIBLE"
    SUSPICIOUS = "SUSPICIOUS"
    FAKE = "FAKE"
    SATIRE = "SATIRE"


class ClaimAssessment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str
    isFact: bool = False
    assessment: str = ""


class Source(BaseModel):
    title: str
    uri: str


class VerificationResult(BaseModel):
    """
    Forensic verdict as returned by the analysis model.

    Only the shape is checked here; the content is the model's call.
    """

    model_config = ConfigDict(extra="ignore")

    score: int
    verdict: Verdict
    summary: str = ""
    isAiGenerated: bool = False
    aiConfidence: float = 0
    aiReasoning: str = ""
    extractedContent: str | None = None
    claims: list[ClaimAssessment] = []

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            raise ValueError("score must be a number")
        if isinstance(v, str):
            v = float(v.strip())
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("score must be finite")
        return max(0, min(100, int(round(v))))

    @field_validator("verdict", mode="before")
    @classmethod
    def _upper_verdict(cls, v):
        return v.strip().upper() if isinstance(v, str) else v
