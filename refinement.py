from __future__ import annotations

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from assembler import AssembledPrompt
from llm_utils import LLMClient, parse_json_object
from prompts_lib import default_negative_prompt, embellish_instructions, safety_audit_instructions

logger = logging.getLogger(__name__)

ResultStatus = Literal["base", "refined", "degraded"]


class GeneratedResult(BaseModel):
    main_text: str
    negative_text: str
    status: ResultStatus = "base"


def _unrefined(base: AssembledPrompt, status: ResultStatus) -> GeneratedResult:
    return GeneratedResult(
        main_text=base.main_text,
        negative_text=default_negative_prompt,
        status=status,
    )


async def _embellish(base: AssembledPrompt, client: LLMClient) -> tuple[str, str]:
    raw = await client.generate_text(
        embellish_instructions.replace("BASE_PROMPT", base.main_text),
        tier="pro",
        json_mode=True,
        deep_reasoning=True,
    )
    try:
        result = parse_json_object(raw or "{}")
    except ValueError:
        logger.warning("Embellish response was not JSON; using the raw text as the prompt.")
        return raw or base.main_text, default_negative_prompt

    prompt = result.get("prompt")
    negative = result.get("negative")
    return (
        prompt if isinstance(prompt, str) and prompt.strip() else base.main_text,
        negative if isinstance(negative, str) and negative.strip() else default_negative_prompt,
    )


async def _audit(prompt: str, client: LLMClient) -> str:
    audited = await client.generate_text(
        safety_audit_instructions.replace("AUDIT_PROMPT", prompt),
        tier="fast",
    )
    return audited or prompt


async def refine(
    base: AssembledPrompt,
    enabled: bool,
    client: Optional[LLMClient],
) -> GeneratedResult:
    """Embellish ``base`` with the pro model, then run the safety audit on the result.

    With ``enabled`` false the base prompt comes back untouched. Any failure in
    either pass returns the base prompt and the default negative prompt with
    status ``degraded``.
    """
    if not enabled:
        return GeneratedResult(main_text=base.main_text, negative_text=base.negative_text)
    if client is None:
        logger.warning("Refinement requested without a configured service client.")
        return _unrefined(base, "degraded")

    try:
        embellished, negative = await _embellish(base, client)
        audited = await _audit(embellished, client)
    except Exception:
        logger.exception("Prompt refinement failed; falling back to the base prompt.")
        return _unrefined(base, "degraded")

    return GeneratedResult(main_text=audited, negative_text=negative, status="refined")
