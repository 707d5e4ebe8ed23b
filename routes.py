# routes.py
from fastapi import FastAPI
from controller.analysis_controller import analysis_router
from controller.chat_controller import chat_router
from controller.history_controller import history_router
from controller.media_controller import media_router
from controller.usage_controller import usage_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(analysis_router)
    app.include_router(media_router)
    app.include_router(history_router)
    app.include_router(chat_router)
    app.include_router(usage_router)
