from tests.upstream import FakeUpstream, make_client, reply_payload


def test_chat_happy_path(settings):
    upstream = FakeUpstream(payload=reply_payload("Hel", "lo"))
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 200
    assert r.json() == {"reply": "Hello"}
    assert upstream.call_count == 1


def test_chat_sends_mapped_contents(settings):
    upstream = FakeUpstream(payload=reply_payload("ok"))
    client = make_client(settings, upstream)

    client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": "user", "content": "a"},
                {"role": "assistant", "content": "b"},
                {"content": "c"},
            ]
        },
    )

    assert upstream.last_body() == {
        "contents": [
            {"role": "user", "parts": [{"text": "a"}]},
            {"role": "model", "parts": [{"text": "b"}]},
            {"role": "user", "parts": [{"text": "c"}]},
        ]
    }
    request = upstream.requests[-1]
    assert request.method == "POST"
    assert request.url.host == "generativelanguage.googleapis.com"
    assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert request.url.params["key"] == "test-key"


def test_chat_no_candidates_returns_empty_reply(settings):
    upstream = FakeUpstream(payload={"candidates": []})
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 200
    assert r.json() == {"reply": ""}


def test_chat_empty_messages_rejected_without_upstream_call(settings):
    upstream = FakeUpstream(payload=reply_payload("unused"))
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": []})
    assert r.status_code == 400
    assert r.json() == {"error": "messages[] required"}

    r = client.post("/api/chat", json={})
    assert r.status_code == 400

    assert upstream.call_count == 0


def test_chat_invalid_body_is_client_error(settings):
    upstream = FakeUpstream(payload=reply_payload("unused"))
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": "hello"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request body"

    r = client.post("/api/chat", json={"messages": [{"role": "user"}]})
    assert r.status_code == 400
    assert "content" in r.json()["detail"]

    assert upstream.call_count == 0


def test_chat_missing_credential(settings):
    settings = settings.model_copy(update={"gemini_api_key": None})
    upstream = FakeUpstream(payload=reply_payload("unused"))
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 500
    assert r.json() == {"error": "Missing GOOGLE_API_KEY"}
    assert upstream.call_count == 0


def test_chat_upstream_error_is_relayed(settings):
    upstream = FakeUpstream(status_code=429, text="quota exceeded")
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "Gemini error"
    assert "quota exceeded" in body["detail"]
    assert body["upstream_status"] == 429


def test_chat_malformed_upstream_json(settings):
    upstream = FakeUpstream(text="<html>not json</html>")
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 500
    assert r.json()["error"] == "Server error"
    assert r.json()["detail"]


def test_chat_unknown_model_falls_back_to_default(settings):
    upstream = FakeUpstream(payload=reply_payload("ok"))
    client = make_client(settings, upstream)

    r = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "model": "not-a-model"},
    )

    assert r.status_code == 200
    assert upstream.requests[-1].url.path == (
        "/v1beta/models/gemini-1.5-flash:generateContent"
    )


def test_chat_known_model_is_used(settings):
    upstream = FakeUpstream(payload=reply_payload("ok"))
    client = make_client(settings, upstream)

    client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "hi"}], "model": "gemini-1.5-pro"},
    )

    assert upstream.requests[-1].url.path == "/v1beta/models/gemini-1.5-pro:generateContent"


class _ExplodingGeminiService:
    async def chat(self, messages, model=None):
        raise RuntimeError("boom")


def test_chat_unexpected_error_is_reported(settings):
    import app.api.chat as chat_api
    from app.main import create_app
    from fastapi.testclient import TestClient

    app = create_app(settings)
    app.dependency_overrides[chat_api.get_gemini_service] = lambda: _ExplodingGeminiService()

    r = TestClient(app).post(
        "/api/chat", json={"messages": [{"role": "user", "content": "hi"}]}
    )

    assert r.status_code == 500
    assert r.json() == {"error": "Server error", "detail": "boom"}


def test_chat_network_failure_is_server_error(settings):
    upstream = FakeUpstream(connect_error="connection refused")
    client = make_client(settings, upstream)

    r = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert r.status_code == 500
    assert r.json() == {"error": "Server error", "detail": "connection refused"}
    assert upstream.call_count == 1


def test_chat_null_or_non_string_role_is_user(settings):
    upstream = FakeUpstream(payload=reply_payload("ok"))
    client = make_client(settings, upstream)

    r = client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": None, "content": "a"},
                {"role": 1, "content": "b"},
                {"role": "assistant", "content": "c"},
            ]
        },
    )

    assert r.status_code == 200
    assert [c["role"] for c in upstream.last_body()["contents"]] == ["user", "user", "model"]
