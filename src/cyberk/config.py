"""
CYBERK - Configuration

Simulator settings. All optional with sensible defaults, overridable
through CYBERK_* environment variables or a .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_STEP_DELAY_MS = 1000
MAX_STEP_DELAY_MS = 10000


def _find_env_file() -> str:
    """Find .env file."""
    project_root = Path(__file__).parent.parent.parent
    env_path = project_root / ".env"
    if env_path.exists():
        return str(env_path)
    if Path(".env").exists():
        return ".env"
    return str(env_path)


class Settings(BaseSettings):
    """Simulator settings - all optional with defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CYBERK_",
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # Stepping
    # ===========================================
    step_delay_ms: int = Field(
        default=3000,
        ge=MIN_STEP_DELAY_MS,
        le=MAX_STEP_DELAY_MS,
        description="Delay between automatic steps in milliseconds",
    )
    success_rate: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Probability that a simulated attack step succeeds",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the decision engine's random generator",
    )
    label_steps_with_target: bool = Field(
        default=True,
        description="Label attack steps with the chosen target name "
                    "instead of the generic placeholder",
    )

    # ===========================================
    # Output
    # ===========================================
    report_dir: str = Field(
        default="./reports",
        description="Output directory for exported reports",
    )

    # ===========================================
    # Debug
    # ===========================================
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
