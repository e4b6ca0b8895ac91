from __future__ import annotations

import json
from typing import Any, Protocol, Sequence

from pydantic import ValidationError

from .errors import EmptyInputError, MalformedResponseError
from .models import PITCH_RESPONSE_SCHEMA, GeneratedResult, ProjectRecord
from .prompts.pitch import (
    FAILURE_ENTRY_TEMPLATE,
    NO_FAILURES_PLACEHOLDER,
    NO_SUCCESSES_PLACEHOLDER,
    SUCCESS_ENTRY_TEMPLATE,
    USER_PROMPT_TEMPLATE,
)


class CompletionProvider(Protocol):
    @property
    def is_configured(self) -> bool:
        pass

    def ensure_configured(self) -> None:
        pass

    def complete(self, prompt: str, response_schema: dict[str, Any]) -> str:
        pass


def partition_projects(
    records: Sequence[ProjectRecord],
) -> tuple[list[ProjectRecord], list[ProjectRecord]]:
    successes = [record for record in records if record.type == "success"]
    failures = [record for record in records if record.type == "failure"]
    return successes, failures


def _render_successes(successes: Sequence[ProjectRecord]) -> str:
    if not successes:
        return NO_SUCCESSES_PLACEHOLDER
    return "\n\n".join(
        SUCCESS_ENTRY_TEMPLATE.format(
            name=record.name,
            description=record.description,
            learnings=record.learnings,
        )
        for record in successes
    )


def _render_failures(failures: Sequence[ProjectRecord]) -> str:
    if not failures:
        return NO_FAILURES_PLACEHOLDER
    return "\n\n".join(
        FAILURE_ENTRY_TEMPLATE.format(
            name=record.name,
            description=record.description,
            learnings=record.learnings,
            fix_plan=record.fix_plan,
        )
        for record in failures
    )


def build_pitch_prompt(records: Sequence[ProjectRecord]) -> str:
    successes, failures = partition_projects(records)
    return USER_PROMPT_TEMPLATE.format(
        success_block=_render_successes(successes),
        failure_block=_render_failures(failures),
    )


def parse_generated_result(raw_content: str) -> GeneratedResult:
    try:
        parsed = json.loads(raw_content)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError("Pitch output is not valid JSON.") from exc

    if not isinstance(parsed, dict):
        raise MalformedResponseError("Pitch JSON root must be an object.")

    try:
        return GeneratedResult.model_validate(parsed)
    except ValidationError as exc:
        raise MalformedResponseError(f"Pitch JSON does not match the expected shape: {exc}") from exc


def generate_pitch(records: Sequence[ProjectRecord], provider: CompletionProvider) -> GeneratedResult:
    """Build the prompt from ``records``, send one request and validate the reply.

    Raises EmptyInputError before touching the provider, ConfigurationError
    before any network attempt, then ProviderError or MalformedResponseError.
    """
    if not records:
        raise EmptyInputError("At least one project is required to generate a pitch.")
    provider.ensure_configured()

    prompt = build_pitch_prompt(records)
    raw_content = provider.complete(prompt, PITCH_RESPONSE_SCHEMA)
    return parse_generated_result(raw_content)
