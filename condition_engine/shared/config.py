"""
Shared configuration management for the condition engine.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Engine configuration, read from CONDITION_ENGINE_* variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="CONDITION_ENGINE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    json_logs: bool = Field(default=True)
    
    # Observability
    metrics_enabled: bool = Field(default=True)
    log_contained_faults: bool = Field(default=True)


def get_config(**overrides) -> EngineConfig:
    """Get engine configuration, with explicit overrides taking precedence."""
    return EngineConfig(**overrides)
