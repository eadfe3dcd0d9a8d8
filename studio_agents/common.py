"""
Shared plumbing for the studio's model-backed helpers.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Dict, Optional

from agents import Agent, Runner, set_default_openai_key
from agents.tracing import set_tracing_disabled, set_tracing_export_api_key
from openai import APIStatusError

from config.settings import settings

logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


class AIUnavailableError(RuntimeError):
    """Raised when no model provider can be used (missing or rejected key)."""


def configure_runtime() -> None:
    """Point the Agents SDK at the configured key and tracing preference."""
    if settings.openai.is_configured:
        set_default_openai_key(settings.openai.api_key)
    if settings.agent.enable_tracing and settings.openai.is_configured:
        set_tracing_disabled(False)
        set_tracing_export_api_key(settings.openai.api_key)
    else:
        set_tracing_disabled(True)


def is_auth_failure(exc: BaseException) -> bool:
    return isinstance(exc, APIStatusError) and exc.status_code == 401


async def run_agent(agent: Agent, prompt: str) -> str:
    """
    Run a single-turn agent and return its text output.

    Raises:
        AIUnavailableError: no API key is configured, or the provider rejected it
    """
    if not settings.openai.is_configured:
        raise AIUnavailableError("OPENAI_API_KEY is not configured")

    try:
        result = await asyncio.wait_for(
            Runner.run(agent, input=prompt, max_turns=settings.agent.max_turns),
            timeout=settings.agent.timeout_seconds,
        )
    except APIStatusError as exc:
        if is_auth_failure(exc):
            raise AIUnavailableError(str(exc)) from exc
        raise

    output = result.final_output
    return output if isinstance(output, str) else json.dumps(output)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from model output, tolerating markdown code fences."""
    if not text:
        return None
    fenced = CODE_FENCE.search(text)
    candidate = fenced.group(1) if fenced else text.strip()
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
