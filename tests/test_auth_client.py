import json

import httpx
import pytest

from identity.auth_client import AuthServiceError, IdentityClient


def _client(handler):
    return IdentityClient(api_key="k-test", endpoint="https://auth.test/v1", http=httpx.Client(transport=httpx.MockTransport(handler)))


def test_sign_in_returns_user_id():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"localId": "u1", "email": "ravi@greenlink.test"})

    out = _client(handler).sign_in("ravi@greenlink.test", "pw")
    assert out == {"user_id": "u1", "email": "ravi@greenlink.test"}
    assert seen["path"].endswith("/accounts:signInWithPassword")
    assert seen["key"] == "k-test"
    assert seen["body"]["password"] == "pw"


def test_error_message_becomes_code():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "WEAK_PASSWORD : Password should be at least 6 characters"}})

    with pytest.raises(AuthServiceError) as e:
        _client(handler).sign_up("a@b.c", "x")
    assert e.value.code == "WEAK_PASSWORD"
    assert e.value.status_code == 400


def test_sign_up_sends_display_name():
    def handler(request):
        assert json.loads(request.content)["displayName"] == "Ravi Kumar"
        return httpx.Response(200, json={"localId": "u9"})

    assert _client(handler).sign_up("ravi@greenlink.test", "secret1", display_name="Ravi Kumar") == "u9"


def test_ensure_identity_falls_back_to_sign_in():
    def handler(request):
        if request.url.path.endswith("accounts:signUp"):
            return httpx.Response(400, json={"error": {"message": "EMAIL_EXISTS"}})
        return httpx.Response(200, json={"localId": "existing"})

    assert _client(handler).ensure_identity("ravi@greenlink.test", "pw") == "existing"


def test_non_json_error():
    def handler(request):
        return httpx.Response(503, text="upstream down")

    with pytest.raises(AuthServiceError) as e:
        _client(handler).sign_in("a@b.c", "pw")
    assert e.value.code == "non_json_response"


def test_requires_api_key(monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings, "AUTH_API_KEY", "")
    with pytest.raises(RuntimeError):
        IdentityClient()
