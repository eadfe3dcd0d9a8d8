"""
Studio CRM - Social Caption Writer Agent
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from agents import Agent, ModelSettings

from config.settings import settings
from models.schemas import CaptionResult
from prompts.agent_prompts import CAPTION_WRITER_PROMPT
from studio_agents.common import AIUnavailableError, extract_json_object, run_agent

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Using fallback generation (AI unavailable)"
DEFAULT_TONE = "Professional but friendly"

BASE_HASHTAGS = ["photography", "photographer", "photooftheday"]
TYPE_HASHTAGS: Dict[str, List[str]] = {
    "Wedding": ["weddingphotography", "weddingday", "bride", "groom"],
    "Corporate": ["corporatephotography", "businessphotography", "professional"],
    "Event": ["eventphotography", "events", "eventplanner"],
    "Portrait": ["portraitphotography", "portraits", "portraitmood"],
    "Product": ["productphotography", "productstyling", "ecommerce"],
    "Fashion": ["fashionphotography", "fashionshoot", "model"],
}


caption_writer_agent = Agent(
    name="Caption Writer",
    instructions=CAPTION_WRITER_PROMPT,
    model=settings.openai.mini_model,
    model_settings=ModelSettings(max_tokens=512),
)


def fallback_hashtags(platform: str, project_type: str) -> List[str]:
    """Static hashtag set for a project type; the platform does not change it."""
    return [*BASE_HASHTAGS, *TYPE_HASHTAGS.get(project_type, ["creative"])]


def _build_prompt(
    platform: str, project_type: str, tone: Optional[str], keywords: Optional[List[str]]
) -> str:
    lines = [
        f"Generate an engaging {platform} caption for a {project_type} project.",
        "",
        f"Tone: {tone or DEFAULT_TONE}",
    ]
    if keywords:
        lines.append(f"Include these keywords: {', '.join(keywords)}")
    lines.extend(
        [
            "",
            "Requirements:",
            f"- Platform: {platform}",
            f"- Project Type: {project_type}",
            "- Include appropriate emojis (but don't overdo it)",
            "- Keep it engaging and authentic",
            "- Suggest 5-10 relevant hashtags",
        ]
    )
    return "\n".join(lines)


def _coerce_result(payload: Dict[str, Any], platform: str, project_type: str) -> CaptionResult:
    caption = payload.get("caption")
    hashtags = payload.get("hashtags")
    if not isinstance(caption, str) or not caption.strip():
        caption = f"Check out this amazing {project_type} project! 📸✨"
    if not isinstance(hashtags, list):
        hashtags = fallback_hashtags(platform, project_type)
    return CaptionResult(
        caption=caption,
        hashtags=[str(tag).lstrip("#") for tag in hashtags],
    )


async def generate_caption(
    platform: str,
    project_type: str,
    tone: Optional[str] = None,
    keywords: Optional[List[str]] = None,
) -> CaptionResult:
    """
    Generate a social caption and hashtags for a project

    Args:
        platform: Target network (instagram, tiktok, ...)
        project_type: Kind of shoot, e.g. "Wedding"
        tone: Optional voice for the copy
        keywords: Optional words the caption should include

    Returns:
        Caption and hashtags; `warning` is set when the static fallback was used
    """
    prompt = _build_prompt(platform, project_type, tone, keywords)
    try:
        response_text = await run_agent(caption_writer_agent, prompt)
    except AIUnavailableError as exc:
        logger.warning("Caption generation falling back to template: %s", exc)
        return CaptionResult(
            caption=f"Excited to share this {project_type} project! 📸",
            hashtags=fallback_hashtags(platform, project_type),
            warning=FALLBACK_WARNING,
        )

    payload = extract_json_object(response_text)
    if payload is None:
        logger.warning("Caption writer returned non-JSON output; using template caption")
        return CaptionResult(
            caption=f"Check out this amazing {project_type} project! 📸✨",
            hashtags=fallback_hashtags(platform, project_type),
        )
    return _coerce_result(payload, platform, project_type)
