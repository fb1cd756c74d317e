"""
Unit tests for prompt construction and the prompted generator adapter.
No model required - the completion callable is a stub.
"""

import asyncio

from prospector.agents.prompts import (
    EMAIL_SYSTEM_PROMPT,
    SEARCH_SYSTEM_PROMPT,
    PromptedGenerator,
    build_email_prompt,
    build_search_prompt,
)
from prospector.collaborators import ProspectGenerator


def test_search_prompt_mentions_inputs(service):
    prompt = build_search_prompt(service, "Law firms", "Seville", limit=5)
    assert "Find up to 5 potential clients in the 'Law firms' sector" in prompt
    assert "'Seville'" in prompt
    assert service.name in prompt
    assert "between 81 and 100" in prompt
    assert "must start with '['" in prompt


def test_email_prompt_carries_sender_and_recipient(make_prospect, service, profile):
    prompt = build_email_prompt(make_prospect(), service, profile)
    assert "Acme Logistics" in prompt
    assert "Dear Laura Gomez," in prompt
    assert profile.email in prompt
    assert "Service page: https://routes.example" in prompt
    assert '{"subject": "string", "body": "string"}' in prompt


def test_email_prompt_without_service_site(make_prospect, service, profile):
    no_site = service.model_copy(update={"website": None})
    assert "Service page" not in build_email_prompt(make_prospect(), no_site, profile)


def test_prompted_generator_routes_prompts(make_prospect, service, profile):
    seen = []

    async def complete(system, prompt):
        seen.append((system, prompt))
        return "[]"

    generator = PromptedGenerator(complete, search_limit=3)
    assert isinstance(generator, ProspectGenerator)

    asyncio.run(generator.generate_prospect_batch(service, "Retail", "Porto"))
    asyncio.run(generator.generate_email_draft(make_prospect(), service, profile))

    assert seen[0][0] == SEARCH_SYSTEM_PROMPT
    assert "Find up to 3 potential clients" in seen[0][1]
    assert seen[1][0] == EMAIL_SYSTEM_PROMPT
