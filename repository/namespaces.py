# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "veritas"

USAGE: Final[str] = f"{ROOT}:usage"  # per-client (date, count)
HISTORY: Final[str] = f"{ROOT}:history"  # per-client newest-first list
MEDIA: Final[str] = f"{ROOT}:media"  # per-client attachment draft
CHATS: Final[str] = f"{ROOT}:chats"  # follow-up sessions by chat id
