"""
Studio CRM - Application Configuration
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class OpenAIConfig:
    """OpenAI API configuration"""

    api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    standard_model: str = field(
        default_factory=lambda: os.getenv("OPENAI_STANDARD_MODEL", "gpt-4.1")
    )
    mini_model: str = field(default_factory=lambda: os.getenv("OPENAI_MINI_MODEL", "gpt-4.1-mini"))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class SupabaseConfig:
    """Supabase configuration"""

    url: str = field(default_factory=lambda: os.getenv("SUPABASE_URL", ""))
    service_key: str = field(
        default_factory=lambda: str(
            os.getenv("SUPABASE_SERVICE_KEY")
            or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
            or ""
        )
    )
    anon_key: str = field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY", ""))

    def __post_init__(self):
        if not self.url or not self.service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY/SUPABASE_SERVICE_ROLE_KEY are required"
            )


@dataclass
class AgentConfig:
    """Agent behavior configuration"""

    max_turns: int = field(default_factory=lambda: int(os.getenv("AGENT_MAX_TURNS", "3")))
    timeout_seconds: int = field(
        default_factory=lambda: int(os.getenv("AGENT_TIMEOUT_SECONDS", "30"))
    )
    enable_tracing: bool = field(
        default_factory=lambda: os.getenv("AGENT_ENABLE_TRACING", "false").lower() == "true"
    )


@dataclass
class StudioConfig:
    """Studio-specific defaults"""

    default_currency: str = field(
        default_factory=lambda: os.getenv("STUDIO_DEFAULT_CURRENCY", "AED")
    )
    upcoming_shoot_days: int = field(
        default_factory=lambda: int(os.getenv("STUDIO_UPCOMING_SHOOT_DAYS", "30"))
    )


@dataclass
class Settings:
    """Application settings"""

    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    supabase: SupabaseConfig = field(default_factory=SupabaseConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    studio: StudioConfig = field(default_factory=StudioConfig)

    # Application settings
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    app_debug: bool = field(
        default_factory=lambda: os.getenv("APP_DEBUG", "true").lower() == "true"
    )
    app_log_level: str = field(default_factory=lambda: os.getenv("APP_LOG_LEVEL", "INFO"))
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", ""))
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


# Global settings instance
settings = Settings()
