# model/usage.py
from pydantic import BaseModel


class Usage(BaseModel):
    date: str
    count: int = 0
