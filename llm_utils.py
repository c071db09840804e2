from __future__ import annotations

import base64
import json
import logging
import re
import time
from typing import Any, Literal

import httpx
from google import genai
from google.genai import types
from openai import AsyncOpenAI

from config import DEFAULT_MODELS, SUPPORTED_SERVICES

logger = logging.getLogger(__name__)

Tier = Literal["fast", "pro"]

GROK_BASE_URL = "https://api.x.ai/v1"

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n?(.+?)\n?```", re.DOTALL | re.IGNORECASE)
_BARE_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class LLMServiceError(RuntimeError):
    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service} API error: {message}")
        self.service = service


def parse_json_object(text: str) -> dict[str, Any]:
    """Decode a JSON object from a model reply, tolerating markdown code fences."""
    content = (text or "").strip()
    fenced = _FENCED_JSON.search(content)
    if fenced:
        content = fenced.group(1).strip()
    elif not content.startswith("{"):
        bare = _BARE_OBJECT.search(content)
        if bare:
            content = bare.group(0)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}.")
    return data


def _error_detail(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    error_body = ""
    if response is not None:
        try:
            error_body = response.text
        except Exception:
            error_body = ""
    status_line = f"HTTP {status_code} " if status_code else ""
    detail_line = f"{error_body} " if error_body else ""
    return f"{status_line}{detail_line}{exc}".strip()


def _response_text(response: Any) -> str:
    output_text = getattr(response, "output_text", None)
    if output_text:
        return str(output_text).strip()

    for item in getattr(response, "output", []) or []:
        for content in getattr(item, "content", []) or []:
            if getattr(content, "type", "") in {"output_text", "text"}:
                text = getattr(content, "text", "")
                if text:
                    return str(text).strip()
    return ""


class LLMClient:
    """Async access to the text/vision model of one service, with a fast and a pro tier."""

    def __init__(
        self,
        service: str,
        api_key: str,
        fast_model: str | None = None,
        pro_model: str | None = None,
    ) -> None:
        service = (service or "gemini").strip().lower()
        if service not in SUPPORTED_SERVICES:
            raise ValueError(f"Unsupported service: {service}")
        fast_default, pro_default = DEFAULT_MODELS[service]
        self.service = service
        self.api_key = api_key
        self.fast_model = fast_model or fast_default
        self.pro_model = pro_model or pro_default
        self._genai_client: genai.Client | None = None
        self._openai: AsyncOpenAI | None = None

    async def __aenter__(self) -> LLMClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._openai is not None:
            await self._openai.close()
            self._openai = None
        self._genai_client = None

    def model_for(self, tier: Tier) -> str:
        return self.pro_model if tier == "pro" else self.fast_model

    async def generate_text(
        self,
        prompt: str,
        *,
        tier: Tier = "fast",
        json_mode: bool = False,
        deep_reasoning: bool = False,
    ) -> str:
        model = self.model_for(tier)
        start = time.time()
        try:
            if self.service == "gemini":
                text = await self._gemini_text(prompt, model, json_mode, deep_reasoning)
            else:
                # gpt-4.1 and grok-4 take no reasoning-level knob
                text = await self._openai_text(prompt, model, json_mode)
        except Exception as exc:
            raise LLMServiceError(self.service, _error_detail(exc)) from exc
        logger.info("%s call to %s took %.2fs", self.service, model, time.time() - start)
        return text

    async def describe_image(
        self,
        image_bytes: bytes,
        mime_type: str,
        instruction: str,
        *,
        json_mode: bool = True,
    ) -> str:
        model = self.fast_model
        start = time.time()
        try:
            if self.service == "gemini":
                text = await self._gemini_image(image_bytes, mime_type, instruction, model, json_mode)
            else:
                text = await self._openai_image(image_bytes, mime_type, instruction, model)
        except Exception as exc:
            raise LLMServiceError(self.service, _error_detail(exc)) from exc
        logger.info("%s vision call to %s took %.2fs", self.service, model, time.time() - start)
        return text

    async def _gemini_text(
        self, prompt: str, model: str, json_mode: bool, deep_reasoning: bool
    ) -> str:
        config = types.GenerateContentConfig(
            response_mime_type="application/json" if json_mode else None,
            thinking_config=(
                types.ThinkingConfig(thinking_level=types.ThinkingLevel.HIGH)
                if deep_reasoning
                else None
            ),
        )
        client = self._gemini_client()
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        return (getattr(response, "text", None) or "").strip()

    async def _gemini_image(
        self, image_bytes: bytes, mime_type: str, instruction: str, model: str, json_mode: bool
    ) -> str:
        client = self._gemini_client()
        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                instruction,
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json" if json_mode else None,
            ),
        )
        return (getattr(response, "text", None) or "").strip()

    def _gemini_client(self) -> genai.Client:
        if self._genai_client is None:
            self._genai_client = genai.Client(api_key=self.api_key)
        return self._genai_client

    def _openai_client(self) -> AsyncOpenAI:
        if self._openai is None:
            if self.service == "grok":
                self._openai = AsyncOpenAI(
                    api_key=self.api_key,
                    base_url=GROK_BASE_URL,
                    timeout=httpx.Timeout(3600.0),
                )
            else:
                self._openai = AsyncOpenAI(api_key=self.api_key)
        return self._openai

    async def _openai_text(self, prompt: str, model: str, json_mode: bool) -> str:
        kwargs: dict[str, Any] = {}
        if self.service == "grok":
            kwargs["store"] = False
        elif json_mode:
            kwargs["text"] = {"format": {"type": "json_object"}}
        client = self._openai_client()
        response = await client.responses.create(
            model=model,
            input=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        return _response_text(response)

    async def _openai_image(
        self, image_bytes: bytes, mime_type: str, instruction: str, model: str
    ) -> str:
        encoded = base64.b64encode(image_bytes).decode("utf-8")
        data_url = f"data:{mime_type};base64,{encoded}"
        kwargs: dict[str, Any] = {"store": False} if self.service == "grok" else {}
        client = self._openai_client()
        response = await client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_image", "image_url": data_url, "detail": "high"},
                        {"type": "input_text", "text": instruction},
                    ],
                }
            ],
            **kwargs,
        )
        return _response_text(response)
