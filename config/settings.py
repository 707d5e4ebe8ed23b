# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment, Language


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    PERSISTENCE_TTL_SECONDS: int = Field(
        default=2 * 60 * 60, validation_alias="PERSISTENCE_TTL_SECONDS"
    )
    HISTORY_TTL_SECONDS: int = Field(
        default=30 * 24 * 60 * 60, validation_alias="HISTORY_TTL_SECONDS"
    )
    USAGE_TTL_SECONDS: int = Field(
        default=2 * 24 * 60 * 60, validation_alias="USAGE_TTL_SECONDS"
    )
    DEFAULT_LANGUAGE: Language = Field(
        default=Language.ES, validation_alias="DEFAULT_LANGUAGE"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_ENABLED: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_FILE_MB: int = Field(default=10, validation_alias="MAX_FILE_MB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")
    MAX_DAILY_QUERIES: int = Field(default=20, validation_alias="MAX_DAILY_QUERIES")
    HISTORY_LIMIT: int = Field(default=50, validation_alias="HISTORY_LIMIT")

    # Gemini Settings
    GEMINI_API_KEY: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    GEMINI_API_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias="GEMINI_API_URL",
    )
    ANALYSIS_MODEL: str = Field(
        default="gemini-3-pro-preview", validation_alias="ANALYSIS_MODEL"
    )
    CHAT_MODEL: str = Field(default="gemini-3-pro-preview", validation_alias="CHAT_MODEL")
    FAST_MODEL: str = Field(default="gemini-2.5-flash", validation_alias="FAST_MODEL")
    THINKING_BUDGET: int = Field(default=2048, validation_alias="THINKING_BUDGET")
    ANALYSIS_TIMEOUT_SECONDS: float = 120.0
    FAST_TIMEOUT_SECONDS: float = 45.0

    # Loading stages (seconds after the analysis starts)
    STAGE_SEARCHING_AT: float = Field(default=2.5, validation_alias="STAGE_SEARCHING_AT")
    STAGE_REASONING_AT: float = Field(default=5.5, validation_alias="STAGE_REASONING_AT")
    STAGE_FINALIZING_AT: float = Field(
        default=8.5, validation_alias="STAGE_FINALIZING_AT"
    )

    # Logging knobs
    LOGGER_NAME: str = "veritas"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    # Prompts
    AUDIO_ANALYSIS_PROMPT: str = (
        "Analyze this audio. Return JSON with two fields: 'transcript' (verbatim text) "
        "and 'analysis' (technical check for AI generation/deepfake artifacts, voice "
        "synthetic analysis)."
    )

    DICTATION_PROMPT: str = (
        "Transcribe the audio into text. Detect the language automatically. "
        "Return ONLY the transcribed text, no explanations."
    )

    CHAT_SYSTEM_PROMPT: str = (
        "You are Veritas Assistant. Help the user understand this forensic report "
        "about fraud/misinformation: "
    )


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
