# tests/test_api.py
import json
import httpx
from config.settings import settings
from core.entities import GenerationResult

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _analyze(client, **body):
    body.setdefault("language", "en")
    return client.post("/api/v1/analyze", json=body)


def _upload(client, name, data, mime, **form):
    return client.post("/api/v1/media", files={"file": (name, data, mime)}, data=form)


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_analyze_requires_some_input(client):
    r = _analyze(client)
    assert r.status_code == 400
    assert r.json()["detail"] == "Content or link required."


def test_analyze_success_records_usage_history_and_chat(client, gemini):
    r = _analyze(client, text="You won a prize!", url="https://news.example/prize")
    assert r.status_code == 200
    body = r.json()

    assert body["result"]["verdict"] == "FAKE"
    assert body["result"]["score"] == 12
    assert [s["uri"] for s in body["sources"]] == ["https://a.example/1", "https://b.example/2"]
    assert body["previewText"] == "https://news.example/prize"
    assert body["input"] == {"text": "You won a prize!", "url": "https://news.example/prize", "media": []}

    (call,) = gemini.calls_of("analysis")
    assert call["model"] == settings.ANALYSIS_MODEL
    assert call["thinking_budget"] == 2048
    assert "in English" in call["system_instruction"]
    assert call["parts"][1] == {"text": "ADDITIONAL CONTEXT: You won a prize!"}

    usage = client.get("/api/v1/usage").json()
    assert (usage["count"], usage["limit"], usage["remaining"]) == (1, 3, 2)

    items = client.get("/api/v1/history").json()["items"]
    assert [i["id"] for i in items] == [body["id"]]

    transcript = client.get(f"/api/v1/chat/{body['chatId']}").json()
    assert transcript == {"chatId": body["chatId"], "messages": []}


def test_unparseable_model_output_records_nothing(client, gemini):
    gemini.replies["analysis"] = GenerationResult(text="I can't judge this one.")
    r = _analyze(client, text="hello", language="es")
    assert r.status_code == 502
    assert r.json()["detail"] == "Error en el análisis."

    assert client.get("/api/v1/usage").json()["count"] == 0
    assert client.get("/api/v1/history").json()["items"] == []


def test_non_numeric_score_is_an_analysis_error(client, gemini):
    gemini.replies["analysis"] = GenerationResult(text='{"score": null, "verdict": "FAKE"}')
    r = _analyze(client, text="hello")
    assert r.status_code == 502
    assert r.json()["detail"] == "Analysis error."
    assert client.get("/api/v1/usage").json()["count"] == 0


def test_upstream_failure_is_an_analysis_error(client, gemini):
    gemini.replies["analysis"] = httpx.ConnectError("down")
    assert _analyze(client, text="hello").status_code == 502


def test_daily_limit(client):
    for _ in range(3):
        assert _analyze(client, text="again").status_code == 200

    r = _analyze(client, text="one more")
    assert r.status_code == 429
    body = r.json()
    assert body["error"] == "daily_limit"
    assert body["title"] == "Daily Limit Reached"
    assert "3 free daily queries" in body["message"]

    # The limit is checked before the input
    assert client.post("/api/v1/analyze", json={}).status_code == 429
    # Other clients are unaffected
    other = client.post(
        "/api/v1/analyze", json={"text": "hi"}, headers={"X-Client-Id": "browser-2"}
    )
    assert other.status_code == 200


def test_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    r = _analyze(client, text="hello")
    assert r.status_code == 503
    assert "GEMINI_API_KEY" in r.json()["detail"]


def test_media_flow_with_audio_pre_analysis(client, gemini):
    image = _upload(client, "shot.png", PNG, "image/png")
    assert image.status_code == 201
    assert image.json()["type"] == "image"
    assert image.json()["isProcessing"] is False
    assert "data" not in image.json()

    audio = _upload(client, "voice.mp3", b"ID3fake", "audio/mpeg")
    assert audio.status_code == 201
    assert audio.json()["isProcessing"] is True

    draft = client.get("/api/v1/media").json()
    assert draft["stage"] == "idle"
    files = {f["type"]: f for f in draft["files"]}
    assert files["audio"]["transcription"] == "hello grandma"
    assert files["audio"]["analysis"] == "Synthetic prosody."
    assert files["audio"]["isProcessing"] is False

    r = _analyze(client, mediaIds=[image.json()["id"], audio.json()["id"]])
    assert r.status_code == 200
    assert r.json()["previewText"] == "Media: image"
    assert [m["type"] for m in r.json()["input"]["media"]] == ["image", "audio"]

    (call,) = gemini.calls_of("analysis")
    assert call["parts"][0]["inlineData"]["mimeType"] == "image/png"
    assert "Technical Pre-Analysis: Synthetic prosody." in call["parts"][1]["text"]


def test_audio_pre_analysis_failure_is_recorded(client, gemini):
    gemini.replies["audio"] = httpx.ReadTimeout("slow")
    audio = _upload(client, "voice.webm", b"webm", "audio/webm")
    (f,) = client.get("/api/v1/media").json()["files"]
    assert f["id"] == audio.json()["id"]
    assert f["analysis"] == "Processing failed."
    assert f["isProcessing"] is False


def test_unknown_media_id_is_rejected(client):
    r = _analyze(client, mediaIds=["missing"])
    assert r.status_code == 404
    assert r.json()["detail"] == "File not found."


def test_media_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_MB", 0)
    r = _upload(client, "big.png", PNG, "image/png", language="pt")
    assert r.status_code == 413
    detail = r.json()["detail"]
    assert detail["error"] == "file_too_large"
    assert detail["message"] == "Máx 10MB."


def test_remove_and_reset_media(client):
    first = _upload(client, "a.png", PNG, "image/png").json()
    _upload(client, "b.mp4", b"\x00\x00\x00\x18ftyp", "video/mp4")

    assert client.delete(f"/api/v1/media/{first['id']}").status_code == 204
    assert client.delete(f"/api/v1/media/{first['id']}").status_code == 404
    assert [f["type"] for f in client.get("/api/v1/media").json()["files"]] == ["video"]

    assert client.delete("/api/v1/media").status_code == 204
    assert client.get("/api/v1/media").json()["files"] == []


def test_dictation_appends_to_existing_text(client, gemini):
    r = client.post(
        "/api/v1/dictation",
        files={"file": ("rec.webm", b"webm", "audio/webm")},
        data={"text": "Yesterday"},
    )
    assert r.json() == {"text": "Yesterday the bank called me"}

    (call,) = gemini.calls_of("dictation")
    assert call["parts"][0]["inlineData"]["mimeType"] == "audio/webm"


def test_dictation_failure(client, gemini):
    gemini.replies["dictation"] = httpx.ConnectError("down")
    r = client.post(
        "/api/v1/dictation",
        files={"file": ("rec.webm", b"webm", "audio/webm")},
        data={"language": "en"},
    )
    assert r.status_code == 502
    assert r.json()["detail"] == "Dictation failed."


def test_stream_emits_stages_then_result(client):
    r = client.post("/api/v1/analyze/stream", json={"text": "Is this legit?", "language": "en"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/x-ndjson")

    events = [json.loads(line) for line in r.text.splitlines() if line]
    assert events[0]["type"] == "stage"
    assert events[0]["payload"]["stage"] == "scanning"
    result = next(e for e in events if e["type"] == "result")
    assert result["payload"]["stage"] == "complete"
    assert result["payload"]["result"]["verdict"] == "FAKE"
    assert events[-1]["type"] == "done"

    assert client.get("/api/v1/usage").json()["count"] == 1


def test_stream_reports_model_failure_in_band(client, gemini):
    gemini.replies["analysis"] = GenerationResult(text="nope")
    r = client.post("/api/v1/analyze/stream", json={"text": "x", "language": "en"})
    assert r.status_code == 200
    events = [json.loads(line) for line in r.text.splitlines() if line]
    error = next(e for e in events if e["type"] == "error")
    assert error["payload"] == {"message": "Analysis error.", "stage": "idle"}


def test_stream_validation_errors_are_plain_http(client):
    r = client.post("/api/v1/analyze/stream", json={"language": "en"})
    assert r.status_code == 400


def test_chat_follow_ups(client, gemini):
    chat_id = _analyze(client, text="prize").json()["chatId"]

    first = client.post(f"/api/v1/chat/{chat_id}/messages", json={"message": "Why?"})
    assert first.json() == {
        "role": "model",
        "text": "It is a scam because the sender domain is spoofed.",
    }
    client.post(f"/api/v1/chat/{chat_id}/messages", json={"message": "Sure?"})

    calls = gemini.calls_of("chat")
    assert calls[0]["history"] == []
    assert [h["role"] for h in calls[1]["history"]] == ["user", "model"]
    assert calls[1]["system_instruction"].startswith("You are Veritas Assistant.")

    messages = client.get(f"/api/v1/chat/{chat_id}").json()["messages"]
    assert [m["text"] for m in messages[::2]] == ["Why?", "Sure?"]


def test_chat_errors(client, gemini):
    chat_id = _analyze(client, text="prize").json()["chatId"]

    blank = client.post(f"/api/v1/chat/{chat_id}/messages", json={"message": "   "})
    assert blank.status_code == 400

    missing = client.post("/api/v1/chat/nope/messages", json={"message": "hi", "language": "en"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Conversation not found."

    gemini.replies["chat"] = httpx.ConnectError("down")
    failed = client.post(f"/api/v1/chat/{chat_id}/messages", json={"message": "hi"})
    assert failed.status_code == 502
    assert client.get(f"/api/v1/chat/{chat_id}").json()["messages"] == []


def test_history_load_report_and_clear(client):
    analysis = _analyze(client, text="Click this link to unlock your account").json()

    loaded = client.get(f"/api/v1/history/{analysis['id']}").json()
    assert loaded["item"]["previewText"] == "Click this link to unlock your account"
    assert loaded["chatId"] != analysis["chatId"]

    report = client.get(f"/api/v1/history/{analysis['id']}/report", params={"language": "en"})
    assert report.headers["content-type"].startswith("text/markdown")
    assert "## Fraudulent" in report.text
    assert "12/100 (Fake / High Risk)" in report.text

    assert client.get("/api/v1/history/unknown").status_code == 404

    other = client.get("/api/v1/history", headers={"X-Client-Id": "browser-2"})
    assert other.json()["items"] == []

    assert client.delete("/api/v1/history").status_code == 204
    assert client.get("/api/v1/history").json()["items"] == []


def test_translations(client):
    bundle = client.get("/api/v1/translations/pt").json()
    assert bundle["verdictLabels"]["FAKE"] == "Fraudulento"
    assert bundle["processingSteps"]["finalizing"] == "Gerando laudo..."
    assert client.get("/api/v1/translations/fr").status_code == 422


def test_client_id_is_validated(client):
    r = client.get("/api/v1/usage", headers={"X-Client-Id": "x" * 65})
    assert r.status_code == 400
