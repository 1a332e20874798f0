"""Triage settings

Environment variables:
- OPENAI_API_KEY: OpenAI API key (safety note assistant only)
- SAFETY_ASSISTANT_ENABLED: enable LLM-phrased advisory notes (default: false)
- DATA_DIR: catalog seed directory (default: data/)
- CATALOG_CACHE_TTL_SECONDS: catalog cache lifetime (default: 3600)
"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field


class TriageSettings(BaseSettings):
    """Triage and recommendation settings"""

    # API Keys
    openai_api_key: str = Field(default="", description="OpenAI API Key")

    # OpenAI
    openai_model: str = Field(default="gpt-4o", description="LLM model")
    safety_assistant_enabled: bool = Field(
        default=False,
        description="Ask the LLM for extra advisory safety notes"
    )

    # Catalog
    data_dir: Path = Field(
        default=Path(__file__).parent.parent.parent / "data",
        description="Data directory"
    )
    catalog_cache_ttl_seconds: float = Field(
        default=3600,
        description="Catalog cache TTL (s)"
    )

    # Routine matching
    routine_match_threshold: int = Field(default=30, description="Minimum routine score")
    routine_item_points: int = Field(default=15, description="Points per matched target phrase")
    routine_location_bonus: int = Field(default=25, description="Location in routine text")
    routine_pain_type_bonus: int = Field(default=10, description="Pain type in routine text")

    # Exercise scoring
    exercise_min_score: int = Field(default=30, description="Minimum exercise score")
    max_exercises: int = Field(default=8, description="Maximum exercises")
    min_exercises: int = Field(default=3, description="Minimum before widening")
    fallback_exercise_count: int = Field(default=5, description="Widened list size")

    # Server
    host: str = Field(default="0.0.0.0", description="Host")
    port: int = Field(default=8000, description="Port")

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = TriageSettings()
