# util/errors.py
from fastapi import HTTPException, status
from util.enums import ErrorMessage, Language
from util.translations import translate


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class DailyLimitError(AppError):
    """Raised when a client has used up its analyses for the day."""

    def __init__(self, language: Language, limit: int) -> None:
        super().__init__("daily_limit", status.HTTP_429_TOO_MANY_REQUESTS)
        self.detail = {
            "ok": False,
            "error": "daily_limit",
            "limit": limit,
            "title": translate(language, "limitTitle"),
            "message": translate(language, "limitMsg"),
            "subMessage": translate(language, "limitSubMsg"),
        }


class InvalidModelOutput(ValueError):
    """The model answered, but not with the JSON shape we asked for."""


def localized_error(error: ErrorMessage, language: Language) -> AppError:
    info = error.value
    return AppError(translate(language, info.message), info.http_status)
