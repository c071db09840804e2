from __future__ import annotations

from typing import Any, Optional

import pytest

from llm_utils import LLMServiceError


class FakeLLMClient:
    """Stands in for LLMClient; replays queued replies and records every call."""

    service = "fake"

    def __init__(self, text_replies: Optional[list[Any]] = None, image_reply: Any = "") -> None:
        self.text_replies = list(text_replies or [])
        self.image_reply = image_reply
        self.text_calls: list[dict[str, Any]] = []
        self.image_calls: list[dict[str, Any]] = []

    async def generate_text(self, prompt, *, tier="fast", json_mode=False, deep_reasoning=False):
        self.text_calls.append(
            {"prompt": prompt, "tier": tier, "json_mode": json_mode, "deep_reasoning": deep_reasoning}
        )
        reply = self.text_replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def describe_image(self, image_bytes, mime_type, instruction, *, json_mode=True):
        self.image_calls.append(
            {"image_bytes": image_bytes, "mime_type": mime_type, "instruction": instruction}
        )
        if isinstance(self.image_reply, Exception):
            raise self.image_reply
        return self.image_reply


@pytest.fixture
def fake_client_factory():
    return FakeLLMClient


@pytest.fixture
def service_error():
    return LLMServiceError("gemini", "HTTP 503 service unavailable")
