import asyncio
import base64
from types import SimpleNamespace

import httpx
import pytest

import llm_utils
from llm_utils import LLMClient, LLMServiceError, parse_json_object


def test_parse_plain_json():
    assert parse_json_object('{"prompt": "x", "negative": "y"}') == {"prompt": "x", "negative": "y"}


def test_parse_fenced_json():
    text = 'Here you go:\n```json\n{"prompt": "fenced"}\n```\nEnjoy.'
    assert parse_json_object(text) == {"prompt": "fenced"}


def test_parse_embedded_object():
    assert parse_json_object('Result: {"subject": "pier"} done') == {"subject": "pier"}


@pytest.mark.parametrize("text", ["", "not json at all", "[1, 2, 3]", '"just a string"'])
def test_parse_rejects_non_objects(text):
    with pytest.raises(ValueError):
        parse_json_object(text)


def test_client_tiers_use_service_defaults():
    client = LLMClient("gemini", "key")
    assert client.model_for("fast") == "gemini-3-flash-preview"
    assert client.model_for("pro") == "gemini-3.1-pro-preview"

    custom = LLMClient("openai", "key", fast_model="small", pro_model="large")
    assert custom.model_for("fast") == "small"
    assert custom.model_for("pro") == "large"


def test_unknown_service_rejected():
    with pytest.raises(ValueError):
        LLMClient("watsonx", "key")


class _FakeModels:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.reply)


def _patch_genai(monkeypatch, models):
    fake_client = SimpleNamespace(aio=SimpleNamespace(models=models))
    monkeypatch.setattr(llm_utils.genai, "Client", lambda api_key: fake_client)


def test_gemini_text_request_flags(monkeypatch):
    models = _FakeModels(reply='  {"prompt": "ok"}  ')
    _patch_genai(monkeypatch, models)

    text = asyncio.run(
        LLMClient("gemini", "key").generate_text("hello", tier="pro", json_mode=True, deep_reasoning=True)
    )

    assert text == '{"prompt": "ok"}'
    call = models.calls[0]
    assert call["model"] == "gemini-3.1-pro-preview"
    assert call["contents"] == "hello"
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].thinking_config is not None


def test_gemini_plain_request_has_no_json_or_thinking(monkeypatch):
    models = _FakeModels(reply="plain")
    _patch_genai(monkeypatch, models)

    asyncio.run(LLMClient("gemini", "key").generate_text("hello"))

    config = models.calls[0]["config"]
    assert config.response_mime_type is None
    assert config.thinking_config is None


def test_gemini_empty_reply_is_empty_string(monkeypatch):
    _patch_genai(monkeypatch, _FakeModels(reply=None))
    assert asyncio.run(LLMClient("gemini", "key").generate_text("hello")) == ""


def test_gemini_errors_are_wrapped(monkeypatch):
    _patch_genai(monkeypatch, _FakeModels(error=ConnectionError("socket closed")))

    with pytest.raises(LLMServiceError) as excinfo:
        asyncio.run(LLMClient("gemini", "key").describe_image(b"img", "image/png", "describe"))

    assert excinfo.value.service == "gemini"
    assert "socket closed" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)


class _FakeResponses:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


class _FakeAsyncOpenAI:
    instances = []

    def __init__(self, responses, **kwargs):
        self.kwargs = kwargs
        self.responses = responses
        self.closed = False
        _FakeAsyncOpenAI.instances.append(self)

    async def close(self):
        self.closed = True


@pytest.fixture
def openai_responses(monkeypatch):
    responses = _FakeResponses(response=SimpleNamespace(output_text=" reply "))
    _FakeAsyncOpenAI.instances = []
    monkeypatch.setattr(
        llm_utils,
        "AsyncOpenAI",
        lambda **kwargs: _FakeAsyncOpenAI(responses, **kwargs),
    )
    return responses


def test_openai_json_mode_request(openai_responses):
    client = LLMClient("openai", "sk-test")

    text = asyncio.run(client.generate_text("make it JSON", tier="pro", json_mode=True, deep_reasoning=True))

    assert text == "reply"
    call = openai_responses.calls[0]
    assert call["model"] == "gpt-4.1-2025-04-14"
    assert call["input"] == [{"role": "user", "content": "make it JSON"}]
    assert call["text"] == {"format": {"type": "json_object"}}
    assert "store" not in call
    assert _FakeAsyncOpenAI.instances[0].kwargs == {"api_key": "sk-test"}


def test_openai_plain_request_has_no_format(openai_responses):
    asyncio.run(LLMClient("openai", "sk-test").generate_text("plain"))
    assert "text" not in openai_responses.calls[0]


def test_grok_uses_xai_endpoint(openai_responses):
    asyncio.run(LLMClient("grok", "xai-key").generate_text("audit this", json_mode=True))

    options = _FakeAsyncOpenAI.instances[0].kwargs
    assert options["base_url"] == "https://api.x.ai/v1"
    assert options["timeout"] == httpx.Timeout(3600.0)
    call = openai_responses.calls[0]
    assert call["model"] == "grok-2-vision-latest"
    assert call["store"] is False
    assert "text" not in call


def test_openai_image_sends_data_url(openai_responses):
    asyncio.run(LLMClient("openai", "sk-test").describe_image(b"\x89PNG", "image/png", "what is this"))

    content = openai_responses.calls[0]["input"][0]["content"]
    image_part, text_part = content
    assert image_part["type"] == "input_image"
    assert image_part["image_url"] == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("utf-8")
    assert text_part == {"type": "input_text", "text": "what is this"}


def test_response_text_walks_output_items(openai_responses):
    openai_responses.response = SimpleNamespace(
        output_text="",
        output=[
            SimpleNamespace(content=[SimpleNamespace(type="reasoning", text="skip")]),
            SimpleNamespace(content=[SimpleNamespace(type="output_text", text=" found ")]),
        ],
    )
    assert asyncio.run(LLMClient("openai", "sk-test").generate_text("x")) == "found"


def test_openai_errors_are_wrapped(openai_responses):
    openai_responses.error = httpx.ConnectError("refused")
    with pytest.raises(LLMServiceError) as excinfo:
        asyncio.run(LLMClient("grok", "xai-key").generate_text("x"))
    assert excinfo.value.service == "grok"


def test_openai_client_is_reused_and_closed(openai_responses):
    async def scenario():
        async with LLMClient("openai", "sk-test") as client:
            await client.generate_text("one")
            await client.describe_image(b"img", "image/jpeg", "two")

    asyncio.run(scenario())

    assert len(_FakeAsyncOpenAI.instances) == 1
    assert _FakeAsyncOpenAI.instances[0].closed is True
    assert len(openai_responses.calls) == 2
