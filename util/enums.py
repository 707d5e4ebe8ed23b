# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Language(str, Enum):
    ES = "es"
    EN = "en"
    PT = "pt"


class AnalysisStage(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SCANNING = "scanning"
    SEARCHING = "searching"
    REASONING = "reasoning"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


# Stages shown while the model call is in flight, in display order.
LOADING_STAGES = (
    AnalysisStage.SCANNING,
    AnalysisStage.SEARCHING,
    AnalysisStage.REASONING,
    AnalysisStage.FINALIZING,
)


class ErrorInfo(NamedTuple):
    message: str  # translation key
    http_status: int


class ErrorMessage(Enum):
    INPUT_REQUIRED = ErrorInfo("errorInput", status.HTTP_400_BAD_REQUEST)
    MEDIA_TOO_LARGE = ErrorInfo(
        "errorMediaSize", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    MISSING_API_KEY = ErrorInfo("errorNoKey", status.HTTP_503_SERVICE_UNAVAILABLE)
    ANALYSIS_FAILED = ErrorInfo("errorAnalysis", status.HTTP_502_BAD_GATEWAY)
    DICTATION_FAILED = ErrorInfo("errorDictation", status.HTTP_502_BAD_GATEWAY)
    CHAT_FAILED = ErrorInfo("errorChat", status.HTTP_502_BAD_GATEWAY)
    MEDIA_PROCESSING = ErrorInfo("errorProcessing", status.HTTP_409_CONFLICT)
    MEDIA_NOT_FOUND = ErrorInfo("errorMediaNotFound", status.HTTP_404_NOT_FOUND)
    HISTORY_NOT_FOUND = ErrorInfo("errorHistoryNotFound", status.HTTP_404_NOT_FOUND)
    CHAT_NOT_FOUND = ErrorInfo("errorChatNotFound", status.HTTP_404_NOT_FOUND)
