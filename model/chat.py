# model/chat.py
from typing import Literal
from pydantic import BaseModel

ChatRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    role: ChatRole
    text: str


class ChatSession(BaseModel):
    id: str
    model: str
    systemInstruction: str
    messages: list[ChatMessage] = []
