"""Outcome measurement settings"""

from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field


class OutcomeSettings(BaseSettings):
    """Outcome scoring and summary settings"""

    default_mcid: float = Field(
        default=10.0,
        description="Function MCID when the questionnaire defines none"
    )
    nprs_mcid: float = Field(default=2.0, description="Pain (NPRS) MCID")
    follow_up_interval_days: int = Field(
        default=14,
        description="Days after the last outcome assessment before a follow-up is due"
    )

    data_dir: Path = Field(
        default=Path(__file__).parent.parent.parent / "data",
        description="Data directory"
    )

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = OutcomeSettings()
