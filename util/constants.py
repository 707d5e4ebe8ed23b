class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    ANALYZE = V1 + "/analyze"
    ANALYZE_STREAM = ANALYZE + "/stream"
    MEDIA = V1 + "/media"
    MEDIA_ITEM = MEDIA + "/{media_id}"
    DICTATION = V1 + "/dictation"
    HISTORY = V1 + "/history"
    HISTORY_ITEM = HISTORY + "/{item_id}"
    HISTORY_REPORT = HISTORY_ITEM + "/report"
    CHAT = V1 + "/chat/{chat_id}"
    CHAT_MESSAGES = CHAT + "/messages"
    USAGE = V1 + "/usage"
    TRANSLATIONS = V1 + "/translations/{language}"


class Headers:
    CLIENT_ID = "x-client-id"
    FORWARDED_FOR = "x-forwarded-for"


MAX_CLIENT_ID_LENGTH = 64
PREVIEW_CHARS = 60
STEPS_SNIPPET_CHARS = 50
