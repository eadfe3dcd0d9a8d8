from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from openai import AuthenticationError

import studio_agents.common as common
import studio_agents.email_parser as email_parser
from config.settings import settings
from studio_agents import AIUnavailableError, fallback_parse, parse_email, score_parsed_inquiry

INQUIRY = (
    "Hi, my name is Jane Doe. I'm planning a wedding next June in Dubai. "
    "Our budget is $4,500 and we want photo and video coverage."
)


def _auth_error() -> AuthenticationError:
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    response = httpx.Response(401, request=request)
    return AuthenticationError("Incorrect API key provided", response=response, body=None)


def test_fallback_parse_extracts_regex_fields() -> None:
    parsed = fallback_parse(INQUIRY)

    assert parsed == {
        "clientName": "Jane Doe",
        "projectType": "Wedding",
        "budget": "$4,500",
        "timeline": "next June",
        "location": "Dubai",
        "requirements": ["Photography", "Videography"],
    }


def test_fallback_parse_ignores_lowercase_after_lead_in() -> None:
    parsed = fallback_parse("I am looking for someone to shoot headshots.")
    assert parsed["clientName"] == "Unknown"
    assert parsed["projectType"] == "Portrait"
    assert parsed["budget"] == "Not specified"


def test_score_parsed_inquiry_weights_each_signal() -> None:
    score = score_parsed_inquiry(
        {
            "budget": "$6,000",
            "timeline": "Urgent",
            "location": "Abu Dhabi",
            "requirements": ["Drone", "Album", "Same-day edit"],
        }
    )

    assert score == {
        "budget": 100,
        "timeline": 90,
        "requirements": 60,
        "location": 80,
        "total": 83,
    }


@pytest.mark.parametrize(
    ("budget", "expected"),
    [
        ("$1,500", 50),
        ("AED 2500", 75),
        ("$800", 25),
        ("Flexible", 70),
        ("Not specified", 30),
    ],
)
def test_score_parsed_inquiry_budget_tiers(budget: str, expected: int) -> None:
    assert score_parsed_inquiry({"budget": budget})["budget"] == expected


def test_score_parsed_inquiry_handles_missing_fields() -> None:
    score = score_parsed_inquiry({})

    assert score["timeline"] == 40
    assert score["requirements"] == 0
    assert score["location"] == 30
    assert score["total"] == 25


def test_score_parsed_inquiry_duration_timeline() -> None:
    assert score_parsed_inquiry({"timeline": "in 6 weeks"})["timeline"] == 70
    assert score_parsed_inquiry({"timeline": "flexible"})["timeline"] == 50


@pytest.mark.asyncio
async def test_parse_email_without_api_key_uses_fallback() -> None:
    result = await parse_email(INQUIRY)

    assert result["warning"] == email_parser.FALLBACK_WARNING
    assert result["parsed"]["clientName"] == "Jane Doe"
    assert result["score"] == email_parser.NEUTRAL_SCORE
    assert result["rawText"] == INQUIRY


@pytest.mark.asyncio
async def test_parse_email_reads_fenced_model_json(stub_agent_output) -> None:
    calls = stub_agent_output(
        email_parser,
        '```json\n{"clientName": "Omar Khan", "projectType": "Corporate", "budget": "$6,000",'
        ' "timeline": "urgent", "location": "Abu Dhabi",'
        ' "requirements": ["Headshots", "Event coverage", "Same-day edit"]}\n```',
    )

    result = await parse_email("Corporate shoot next week please")

    assert "Corporate shoot next week please" in calls[0]
    assert result["parsed"]["clientName"] == "Omar Khan"
    assert result["score"]["total"] == 83
    assert "warning" not in result


@pytest.mark.asyncio
async def test_parse_email_with_non_json_output_returns_empty_result(stub_agent_output) -> None:
    stub_agent_output(email_parser, "Sorry, I can't help with that.")

    result = await parse_email("anything")

    assert result["parsed"] == email_parser.UNPARSEABLE_RESULT
    assert result["score"]["total"] == 25


@pytest.mark.asyncio
async def test_run_agent_requires_api_key() -> None:
    with pytest.raises(AIUnavailableError):
        await common.run_agent(email_parser.email_parser_agent, "prompt")


@pytest.mark.asyncio
async def test_run_agent_maps_rejected_key_to_unavailable(monkeypatch) -> None:
    async def _reject(*_args, **_kwargs):
        raise _auth_error()

    monkeypatch.setattr(settings.openai, "api_key", "sk-test")
    monkeypatch.setattr(common, "Runner", SimpleNamespace(run=_reject))

    with pytest.raises(AIUnavailableError):
        await common.run_agent(email_parser.email_parser_agent, "prompt")


@pytest.mark.asyncio
async def test_run_agent_serializes_structured_output(monkeypatch) -> None:
    async def _structured(*_args, **_kwargs):
        return SimpleNamespace(final_output={"caption": "hi"})

    monkeypatch.setattr(settings.openai, "api_key", "sk-test")
    monkeypatch.setattr(common, "Runner", SimpleNamespace(run=_structured))

    assert await common.run_agent(email_parser.email_parser_agent, "prompt") == '{"caption": "hi"}'


def test_extract_json_object_variants() -> None:
    assert common.extract_json_object('{"a": 1}') == {"a": 1}
    assert common.extract_json_object('Here you go:\n```\n{"a": 2}\n```') == {"a": 2}
    assert common.extract_json_object("[1, 2]") is None
    assert common.extract_json_object("not json") is None
    assert common.extract_json_object("") is None
