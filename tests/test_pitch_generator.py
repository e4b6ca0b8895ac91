from __future__ import annotations

import json

import pytest

from careerstory.backend.errors import (
    ConfigurationError,
    EmptyInputError,
    MalformedResponseError,
    ProviderError,
)
from careerstory.backend.models import PITCH_RESPONSE_SCHEMA
from careerstory.backend.pitch_generator import (
    build_pitch_prompt,
    generate_pitch,
    parse_generated_result,
    partition_projects,
)
from careerstory.backend.prompts.pitch import NO_FAILURES_PLACEHOLDER, NO_SUCCESSES_PLACEHOLDER
from careerstory.backend.storage import InMemoryProjectStore
from conftest import FakeProvider, failure_draft, success_draft


def _records(*drafts):
    store = InMemoryProjectStore()
    for draft in drafts:
        store.add(draft)
    return store.list()


def test_prompt_renders_both_sections_for_example_scenario() -> None:
    records = _records(success_draft(), failure_draft())
    prompt = build_pitch_prompt(records)

    success_section, failure_section = prompt.split("### CHALLENGING/UNSUCCESSFUL PROJECTS")
    assert '- Project Name: "Site Migration"' in success_section
    assert "  Key Takeaways/Learnings: Learned caching strategies" in success_section
    assert '- Project Name: "Beta Launch"' in failure_section
    assert "  What went wrong & Learnings: Underestimated QA time" in failure_section
    assert "  Recovery/Fix Plan: Added staging gate" in failure_section
    assert '"Why should we hire you?"' in prompt
    assert NO_SUCCESSES_PLACEHOLDER not in prompt
    assert NO_FAILURES_PLACEHOLDER not in prompt


def test_prompt_uses_placeholders_for_empty_partitions() -> None:
    only_successes = build_pitch_prompt(_records(success_draft()))
    only_failures = build_pitch_prompt(_records(failure_draft()))

    assert NO_FAILURES_PLACEHOLDER in only_successes
    assert NO_SUCCESSES_PLACEHOLDER not in only_successes
    assert NO_SUCCESSES_PLACEHOLDER in only_failures
    assert NO_FAILURES_PLACEHOLDER not in only_failures


def test_prompt_is_deterministic() -> None:
    records = _records(success_draft("A"), failure_draft("B"), success_draft("C"))
    assert build_pitch_prompt(records) == build_pitch_prompt(list(records))


def test_partition_is_exhaustive_and_order_preserving() -> None:
    records = _records(success_draft("S1"), failure_draft("F1"), success_draft("S2"), failure_draft("F2"))
    successes, failures = partition_projects(records)

    assert [record.name for record in successes] == ["S2", "S1"]
    assert [record.name for record in failures] == ["F2", "F1"]
    assert len(successes) + len(failures) == len(records)

    prompt = build_pitch_prompt(records)
    assert prompt.index('"S2"') < prompt.index('"S1"') < prompt.index('"F2"') < prompt.index('"F1"')
    assert "\n\n- Project Name: \"S1\"" in prompt


def test_user_text_with_braces_is_inserted_verbatim() -> None:
    records = _records(success_draft("{failure_block}", learnings="Used {placeholders} in templates"))
    prompt = build_pitch_prompt(records)
    assert '"{failure_block}"' in prompt
    assert "Used {placeholders} in templates" in prompt


def test_generate_returns_validated_result_and_sends_schema() -> None:
    provider = FakeProvider()
    result = generate_pitch(_records(success_draft(), failure_draft()), provider)

    assert result.pitch.strip()
    assert result.key_strengths == ["Performance tuning", "Owning mistakes"]
    assert len(provider.prompts) == 1
    assert provider.schemas == [PITCH_RESPONSE_SCHEMA]


def test_generate_with_no_records_never_calls_provider() -> None:
    provider = FakeProvider(configured=False)
    with pytest.raises(EmptyInputError):
        generate_pitch([], provider)
    assert provider.prompts == []


def test_generate_without_credentials_never_calls_provider() -> None:
    provider = FakeProvider(configured=False)
    with pytest.raises(ConfigurationError):
        generate_pitch(_records(success_draft()), provider)
    assert provider.prompts == []


def test_provider_errors_propagate_without_retry() -> None:
    provider = FakeProvider(error=ProviderError("LLM request failed (503): overloaded"))
    with pytest.raises(ProviderError):
        generate_pitch(_records(success_draft()), provider)
    assert len(provider.prompts) == 1


@pytest.mark.parametrize(
    "raw_content",
    [
        "not json at all",
        '{"pitch": "Hire me", "keyStrengths": [',
        json.dumps(["Hire me"]),
        json.dumps({"keyStrengths": ["Grit"]}),
        json.dumps({"pitch": "", "keyStrengths": ["Grit"]}),
        json.dumps({"pitch": "Hire me"}),
        json.dumps({"pitch": "Hire me", "keyStrengths": "Grit"}),
        json.dumps({"pitch": "Hire me", "keyStrengths": ["Grit", None]}),
        json.dumps({"pitch": 42, "keyStrengths": []}),
    ],
)
def test_malformed_payloads_are_rejected(raw_content: str) -> None:
    with pytest.raises(MalformedResponseError):
        parse_generated_result(raw_content)


def test_empty_strengths_list_is_accepted() -> None:
    result = parse_generated_result(json.dumps({"pitch": "Hire me", "keyStrengths": []}))
    assert result.key_strengths == []
