import pytest

from spantrans import config
from spantrans.deepl.exceptions import RateLimitedError, UnauthorizedError
from spantrans.deepl.models import Glossary, Language, Usage
from spantrans.web import create_app


class AccountClient:
    """Client stand-in for the account routes."""

    def __init__(self, error=None):
        self.error = error

    def get_usage(self):
        if self.error:
            raise self.error
        return Usage(character_count=10, character_limit=500000)

    def get_target_languages(self):
        return [Language(code="DE", name="German", supports_formality=True)]

    def list_glossaries(self):
        return [Glossary(glossary_id="g-1", name="Physics", source_lang="de", target_lang="en")]


@pytest.fixture
def client_double(fake_client_class):
    return fake_client_class(translations={
        ("Hallo Welt", "EN-US"): "Hello world",
        ("Hello world", "DE"): "Hallo, Welt",
    })


@pytest.fixture
def http(client_double):
    app = create_app(client=client_double, detector=lambda text: "DE")
    app.config["TESTING"] = True
    return app.test_client()


def create_document(http, text):
    response = http.post("/api/documents", json={"text": text})
    assert response.status_code == 201
    return response.get_json()["document"]["id"]


def test_health(http):
    assert http.get("/health").get_json() == {"status": "ok"}


def test_translate_review_and_accept(http):
    document_id = create_document(http, "Hallo Welt\n\nZweiter Absatz")

    response = http.post(f"/api/documents/{document_id}/translate", json={"cursor": 3})
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["session"]["state"] == "reviewing"
    assert payload["session"]["draft_text"] == "Hello world"
    assert payload["document"]["highlights"] == [{"start": 0, "end": 10}]

    response = http.put("/api/session/draft", json={"text": "Hello, world!"})
    assert response.get_json()["session"]["draft_text"] == "Hello, world!"

    response = http.post("/api/session/accept")
    payload = response.get_json()
    assert payload["session"]["state"] == "accepted"
    assert payload["document"]["text"] == "Hello, world!\n\nZweiter Absatz"
    assert payload["document"]["highlights"] == []


def test_round_trip_request(http, client_double):
    document_id = create_document(http, "Hallo Welt")

    response = http.post(f"/api/documents/{document_id}/translate", json={"round_trip": True})

    assert response.get_json()["session"]["draft_text"] == "Hallo, Welt"
    assert [call["target_lang"] for call in client_double.calls] == ["EN-US", "DE"]


def test_dismiss_keeps_document(http):
    document_id = create_document(http, "Hallo Welt")
    http.post(f"/api/documents/{document_id}/translate", json={"start": 0, "end": 10})

    response = http.post("/api/session/dismiss")

    assert response.get_json()["session"]["state"] == "dismissed"
    assert http.get(f"/api/documents/{document_id}").get_json()["document"]["text"] == "Hallo Welt"


def test_new_request_dismisses_open_session(http):
    document_id = create_document(http, "Hallo Welt\n\nZweiter Absatz")
    first = http.post(f"/api/documents/{document_id}/translate", json={"cursor": 0}).get_json()["session"]

    second = http.post(f"/api/documents/{document_id}/rephrase", json={"cursor": 14}).get_json()["session"]

    assert second["kind"] == "rephrase"
    assert second["state"] == "reviewing"
    assert http.get("/api/session").get_json()["session"]["session_id"] == second["session_id"]
    assert first["session_id"] != second["session_id"]
    assert http.get(f"/api/documents/{document_id}").get_json()["document"]["text"] == "Hallo Welt\n\nZweiter Absatz"


def test_accept_without_session_is_404(http):
    response = http.post("/api/session/accept")

    assert response.status_code == 404
    assert response.get_json()["code"] == "invalid_session_state"


def test_accept_twice_is_conflict(http):
    document_id = create_document(http, "Hallo Welt")
    http.post(f"/api/documents/{document_id}/translate", json={})
    http.post("/api/session/accept")

    response = http.post("/api/session/accept")

    assert response.status_code == 409


def test_provider_error_is_reported_and_session_released(fake_client_class):
    failing = fake_client_class(fail_on_call=1, error=RateLimitedError("Too many requests", status_code=429))
    http = create_app(client=failing, detector=lambda text: "DE").test_client()
    document_id = create_document(http, "Hallo Welt")

    response = http.post(f"/api/documents/{document_id}/translate", json={})

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["code"] == "rate_limited"
    assert payload["details"]["provider_message"] == "Too many requests"
    assert http.get("/api/session").get_json()["session"]["state"] == "dismissed"
    assert http.get(f"/api/documents/{document_id}").get_json()["document"]["highlights"] == []


def test_unknown_document_is_404(http):
    assert http.post("/api/documents/missing/translate", json={}).status_code == 404


def test_invalid_span_is_400(http):
    document_id = create_document(http, "short")

    response = http.post(f"/api/documents/{document_id}/translate", json={"start": 0, "end": 99})

    assert response.status_code == 400
    assert response.get_json()["code"] == "invalid_span"


def test_account_routes():
    http = create_app(client=AccountClient()).test_client()

    assert http.get("/api/deepl/usage").get_json()["usage"]["character_limit"] == 500000
    assert http.get("/api/deepl/languages").get_json()["languages"][0]["code"] == "DE"
    assert http.get("/api/deepl/glossaries").get_json()["glossaries"][0]["glossary_id"] == "g-1"


def test_account_route_error_maps_to_bad_gateway():
    http = create_app(client=AccountClient(error=UnauthorizedError("Wrong key", status_code=403))).test_client()

    response = http.get("/api/deepl/usage")

    assert response.status_code == 502
    assert response.get_json()["code"] == "unauthorized"


def test_settings_update_merges_sections(http):
    response = http.put("/api/settings/", json={"config": {
        "deepl": {"api_key": "secret:fx"},
        "languages": {"second": "EN-GB"},
        "round_trip": True,
    }})

    assert response.status_code == 200
    stored = config.load_config()
    assert stored["deepl"]["api_key"] == "secret:fx"
    assert stored["deepl"]["timeout"] == 30
    assert stored["languages"] == {"first": "DE", "second": "EN-GB"}
    assert stored["round_trip"] is True


def test_settings_reject_invalid_values(http):
    assert http.put("/api/settings/", json={"config": {"log_mode": "loud"}}).status_code == 400
    assert http.put("/api/settings/", json={"config": {"translation": {"formality": "rude"}}}).status_code == 400
    assert http.put("/api/settings/", json={"config": {"languages": {"second": "DE"}}}).status_code == 400
    assert http.put("/api/settings/", json={}).status_code == 400


def test_get_settings(http):
    payload = http.get("/api/settings/").get_json()

    assert payload["config"]["languages"] == {"first": "DE", "second": "EN-US"}
    assert "prefer_quality" in payload["meta"]["model_type"]
    assert payload["meta"]["language_pair"]["second"] == {"code": "EN-US", "name": "English (American)"}


def test_log_clearing_route_is_not_exposed(http):
    assert http.delete("/api/settings/logs").status_code in (404, 405)
