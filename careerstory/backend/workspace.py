from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .constants import EMPTY_PROJECTS_MESSAGE, GENERATION_FAILED_MESSAGE, MAX_ERROR_CHARS
from .errors import EmptyInputError, PitchGenerationError
from .models import GeneratedResult
from .pitch_generator import CompletionProvider, generate_pitch
from .prompts.pitch import PITCH_PROMPT_VERSION
from .storage import InMemoryProjectStore


logger = logging.getLogger("uvicorn.error")


class GenerationInProgressError(RuntimeError):
    pass


@dataclass
class PitchOutcome:
    result: GeneratedResult
    is_current: bool


def _truncate(text: str, max_chars: int = MAX_ERROR_CHARS) -> str:
    value = (text or "").strip()
    if len(value) <= max_chars:
        return value
    return value[: max_chars - 3] + "..."


def user_message(exc: PitchGenerationError) -> str:
    if isinstance(exc, EmptyInputError):
        return EMPTY_PROJECTS_MESSAGE
    return GENERATION_FAILED_MESSAGE


class PitchWorkspace:
    """Session state around the project store: the current pitch, the last
    error and whether a generation is running.

    Any store mutation clears the current pitch. A generation that finishes
    after the store changed is handed back to its caller but not kept.
    """

    def __init__(self, store: InMemoryProjectStore, provider: CompletionProvider) -> None:
        self.store = store
        self.provider = provider
        self._result: Optional[GeneratedResult] = None
        self._error: Optional[str] = None
        self._generating = False
        self._lock = threading.Lock()
        store.subscribe(self.invalidate)

    @property
    def result(self) -> Optional[GeneratedResult]:
        with self._lock:
            return self._result

    @property
    def error(self) -> Optional[str]:
        with self._lock:
            return self._error

    @property
    def generating(self) -> bool:
        with self._lock:
            return self._generating

    def invalidate(self) -> None:
        with self._lock:
            self._result = None

    def generate(self) -> PitchOutcome:
        with self._lock:
            if self._generating:
                raise GenerationInProgressError("A pitch generation is already running.")
            self._generating = True
            self._error = None

        try:
            records, revision = self.store.snapshot()
            logger.info(
                "pitch_generation_started projects=%s prompt_version=%s",
                len(records),
                PITCH_PROMPT_VERSION,
            )
            try:
                result = generate_pitch(records, self.provider)
            except PitchGenerationError as exc:
                logger.warning(
                    "pitch_generation_failed kind=%s error=%s",
                    type(exc).__name__,
                    _truncate(str(exc)),
                )
                with self._lock:
                    self._error = user_message(exc)
                raise

            with self._lock:
                is_current = self.store.revision == revision
                if is_current:
                    self._result = result
            logger.info(
                "pitch_generation_done strengths=%s is_current=%s",
                len(result.key_strengths),
                is_current,
            )
            return PitchOutcome(result=result, is_current=is_current)
        finally:
            with self._lock:
                self._generating = False
