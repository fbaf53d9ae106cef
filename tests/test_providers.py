import json

import httpx
import pytest

from a11y_audit.fixes.providers import (
    AnthropicProvider,
    GoogleProvider,
    OpenAIProvider,
    ProviderError,
    get_provider,
)


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_google_provider_extracts_candidate_text():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "candidates": [{"content": {"parts": [{"text": "FIXED_HTML:\n<img alt=\"\">"}]}}],
        })

    provider = GoogleProvider(api_key="secret", client=make_client(handler))
    assert provider.complete("fix it") == "FIXED_HTML:\n<img alt=\"\">"
    assert "gemini-2.5-flash:generateContent" in seen["url"]
    assert seen["key"] == "secret"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "fix it"


def test_openai_provider_extracts_message():
    def handler(request):
        assert request.headers["authorization"] == "Bearer sk-test"
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    provider = OpenAIProvider(api_key="sk-test", client=make_client(handler))
    assert provider.complete("hi") == "ok"


def test_anthropic_provider_extracts_content():
    def handler(request):
        assert request.headers["x-api-key"] == "ak"
        return httpx.Response(200, json={"content": [{"type": "text", "text": "done"}]})

    provider = AnthropicProvider(api_key="ak", client=make_client(handler))
    assert provider.complete("hi") == "done"


def test_http_error_becomes_provider_error():
    provider = GoogleProvider(api_key="k", client=make_client(lambda r: httpx.Response(503)))
    with pytest.raises(ProviderError, match="HTTP 503"):
        provider.complete("hi")


def test_timeout_becomes_provider_error():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    provider = GoogleProvider(api_key="k", client=make_client(handler))
    with pytest.raises(ProviderError, match="timed out"):
        provider.complete("hi")


def test_unexpected_payload_becomes_provider_error():
    provider = GoogleProvider(api_key="k", client=make_client(lambda r: httpx.Response(200, json={})))
    with pytest.raises(ProviderError, match="unexpected response"):
        provider.complete("hi")


def test_unconfigured_provider_refuses(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    provider = GoogleProvider()
    assert not provider.is_configured()
    with pytest.raises(ProviderError, match="GEMINI_API_KEY"):
        provider.complete("hi")


def test_google_provider_reads_key_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    assert GoogleProvider().api_key == "from-env"


def test_get_provider_by_name():
    assert isinstance(get_provider("OpenAI", api_key="x"), OpenAIProvider)
    with pytest.raises(ValueError):
        get_provider("bogus")
