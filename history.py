from __future__ import annotations

HISTORY_CAPACITY = 20


class PromptHistory:
    """Newest-first list of generated main prompts, capped at ``capacity``."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1.")
        self.capacity = capacity
        self._entries: list[str] = []

    def record(self, prompt: str) -> None:
        self._entries = [prompt, *self._entries[: self.capacity - 1]]

    def clear(self) -> None:
        self._entries = []

    def list(self) -> list[str]:
        return list(self._entries)

    def recall(self, index: int) -> str:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)
