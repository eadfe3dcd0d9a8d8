"""
Studio CRM - Agent System Initialization
"""

from studio_agents.caption_writer import caption_writer_agent, fallback_hashtags, generate_caption
from studio_agents.common import AIUnavailableError, configure_runtime
from studio_agents.email_parser import (
    email_parser_agent,
    fallback_parse,
    parse_email,
    score_parsed_inquiry,
)

__all__ = [
    "AIUnavailableError",
    "caption_writer_agent",
    "configure_runtime",
    "email_parser_agent",
    "fallback_hashtags",
    "fallback_parse",
    "generate_caption",
    "parse_email",
    "score_parsed_inquiry",
]
