"""
Studio CRM - Inquiry Email Parser Agent

Extracts booking details from a client inquiry with a model, scores the result
(0-100), and degrades to regex extraction when no model is available.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List

from agents import Agent, ModelSettings

from config.settings import settings
from prompts.agent_prompts import EMAIL_PARSER_PROMPT
from studio_agents.common import AIUnavailableError, extract_json_object, run_agent

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Using fallback parsing (AI unavailable)"
NOT_SPECIFIED = "Not specified"

UNPARSEABLE_RESULT: Dict[str, Any] = {
    "clientName": "Unknown",
    "projectType": "Other",
    "budget": NOT_SPECIFIED,
    "timeline": NOT_SPECIFIED,
    "location": NOT_SPECIFIED,
    "requirements": [],
}

NEUTRAL_SCORE = {"budget": 50, "timeline": 50, "requirements": 50, "location": 50, "total": 50}

# Checked in order; the first group with a keyword present wins.
FALLBACK_PROJECT_TYPES = (
    (("wedding",), "Wedding"),
    (("corporate", "business"), "Corporate"),
    (("event", "party"), "Event"),
    (("portrait", "headshot"), "Portrait"),
    (("product",), "Product"),
    (("real estate", "property"), "Real Estate"),
    (("fashion",), "Fashion"),
)

FALLBACK_REQUIREMENTS = (
    (("photo",), "Photography"),
    (("video",), "Videography"),
    (("edit",), "Editing"),
    (("drone", "aerial"), "Drone/Aerial"),
    (("album",), "Photo Album"),
)

NAME_PATTERN = re.compile(r"(?i:my name is|i'm|i am)\s+([A-Z][a-z]+\s+[A-Z][a-z]+)")
BUDGET_PATTERN = re.compile(r"\$[\d,]+")
TIMELINE_PATTERN = re.compile(r"(next\s+\w+|in\s+\d+\s+\w+|\d+/\d+/\d+)", re.IGNORECASE)
LOCATION_PATTERN = re.compile(r"(?:in|at|location:)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)")
DURATION_PATTERN = re.compile(r"\d+\s*(week|month)")


email_parser_agent = Agent(
    name="Inquiry Parser",
    instructions=EMAIL_PARSER_PROMPT,
    model=settings.openai.standard_model,
    model_settings=ModelSettings(max_tokens=1024),
)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _score_budget(budget_text: str) -> int:
    amount_match = re.search(r"\d[\d,]*", budget_text)
    if "$" in budget_text or amount_match:
        amount = int(amount_match.group(0).replace(",", "")) if amount_match else 0
        if amount > 5000:
            return 100
        if amount > 2000:
            return 75
        if amount > 1000:
            return 50
        if amount > 0:
            return 25
        return 0
    if "flexible" in budget_text or "open" in budget_text:
        return 70
    return 30


def _score_timeline(timeline_text: str) -> int:
    if any(word in timeline_text for word in ("urgent", "asap", "soon")):
        return 90
    if DURATION_PATTERN.search(timeline_text):
        return 70
    if "flexible" in timeline_text:
        return 50
    return 40


def score_parsed_inquiry(parsed: Dict[str, Any]) -> Dict[str, int]:
    """Score model-extracted inquiry fields; each signal and the total are 0-100."""
    requirements = parsed.get("requirements")
    requirement_count = len(requirements) if isinstance(requirements, list) else 0
    location = _text(parsed.get("location"))

    budget_score = _score_budget(_text(parsed.get("budget")).lower())
    timeline_score = _score_timeline(_text(parsed.get("timeline")).lower())
    requirements_score = min(100, requirement_count * 20)
    location_score = 80 if location and location != NOT_SPECIFIED else 30

    # Half-up rounding of the mean
    total = math.floor(
        (budget_score + timeline_score + requirements_score + location_score) / 4 + 0.5
    )
    return {
        "budget": budget_score,
        "timeline": timeline_score,
        "requirements": requirements_score,
        "location": location_score,
        "total": total,
    }


def _first_match(pattern: re.Pattern, text: str, group: int = 0) -> str:
    match = pattern.search(text)
    return match.group(group) if match else ""


def _fallback_project_type(lower_text: str) -> str:
    for keywords, project_type in FALLBACK_PROJECT_TYPES:
        if any(keyword in lower_text for keyword in keywords):
            return project_type
    return "Other"


def _fallback_requirements(lower_text: str) -> List[str]:
    return [
        label
        for keywords, label in FALLBACK_REQUIREMENTS
        if any(keyword in lower_text for keyword in keywords)
    ]


def fallback_parse(email_text: str) -> Dict[str, Any]:
    """Regex extraction used when no model is available."""
    lower_text = email_text.lower()
    return {
        "clientName": _first_match(NAME_PATTERN, email_text, 1) or "Unknown",
        "projectType": _fallback_project_type(lower_text),
        "budget": _first_match(BUDGET_PATTERN, email_text) or NOT_SPECIFIED,
        "timeline": _first_match(TIMELINE_PATTERN, email_text) or NOT_SPECIFIED,
        "location": _first_match(LOCATION_PATTERN, email_text, 1) or NOT_SPECIFIED,
        "requirements": _fallback_requirements(lower_text),
    }


def _build_prompt(email_text: str) -> str:
    return f"""Extract the inquiry details from this email.

Email:
{email_text}

Respond ONLY with the JSON object, no other text."""


async def parse_email(email_text: str) -> Dict[str, Any]:
    """
    Parse an inquiry email and score the lead

    Args:
        email_text: Raw email body

    Returns:
        {"parsed", "score", "rawText"} plus "warning" when the regex fallback was used
    """
    try:
        response_text = await run_agent(email_parser_agent, _build_prompt(email_text))
    except AIUnavailableError as exc:
        logger.warning("Inquiry parsing falling back to rules: %s", exc)
        return {
            "parsed": fallback_parse(email_text),
            "score": dict(NEUTRAL_SCORE),
            "rawText": email_text,
            "warning": FALLBACK_WARNING,
        }

    parsed = extract_json_object(response_text)
    if parsed is None:
        logger.warning("Inquiry parser returned non-JSON output; using empty result")
        parsed = dict(UNPARSEABLE_RESULT)

    return {
        "parsed": parsed,
        "score": score_parsed_inquiry(parsed),
        "rawText": email_text,
    }
