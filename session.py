from __future__ import annotations

import logging
import random
from typing import Optional

from analyzer import AnalysisResult, analyze, apply_analysis
from assembler import SelectionState, assemble, randomize_selection
from history import PromptHistory
from llm_utils import LLMClient
from refinement import GeneratedResult, refine

logger = logging.getLogger(__name__)


class SessionBusyError(RuntimeError):
    pass


class Session:
    """In-memory state of one browser session.

    ``refining`` and ``analyzing`` guard their pipelines: a second request
    while one is running is rejected, not queued.
    """

    def __init__(self, selection: Optional[SelectionState] = None) -> None:
        self.selection = selection or SelectionState()
        self.history = PromptHistory()
        self.last_result: Optional[GeneratedResult] = None
        self.refining = False
        self.analyzing = False

    def update_selection(self, selection: SelectionState) -> SelectionState:
        self.selection = selection
        return self.selection

    def randomize(self, rng: Optional[random.Random] = None) -> SelectionState:
        self.selection = randomize_selection(self.selection, rng)
        return self.selection

    async def generate(
        self,
        client: Optional[LLMClient] = None,
        refine_enabled: bool = False,
        selection: Optional[SelectionState] = None,
    ) -> GeneratedResult:
        if refine_enabled and self.refining:
            raise SessionBusyError("A prompt refinement is already running.")
        if selection is not None:
            self.selection = selection

        base = assemble(self.selection)
        if refine_enabled:
            self.refining = True
            try:
                result = await refine(base, True, client)
            finally:
                self.refining = False
            if result.status == "degraded":
                logger.warning("Refinement degraded to the base prompt.")
        else:
            result = await refine(base, False, client)

        self.last_result = result
        self.history.record(result.main_text)
        return result

    async def analyze_image(
        self,
        client: LLMClient,
        image_bytes: bytes,
        mime_type: str,
    ) -> AnalysisResult:
        if self.analyzing:
            raise SessionBusyError("An image analysis is already running.")
        self.analyzing = True
        try:
            result = await analyze(image_bytes, mime_type, client)
        finally:
            self.analyzing = False
        self.selection = apply_analysis(self.selection, result)
        return result
