"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Restaurant Graph QA"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 3002

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("vector_threshold")
    @classmethod
    def validate_vector_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"vector_threshold must be between 0 and 1, got {v}")
        return v

    @model_validator(mode="after")
    def validate_positive_limits(self) -> "Settings":
        for field_name in (
            "llm_timeout",
            "llm_max_retries",
            "coder_max_tokens",
            "nlp_max_tokens",
            "vector_dimensions",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'] - consider restricting in production"
            )
        return self

    # Neo4j
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = ""
    neo4j_database: str | None = None

    # Similarity cache
    cache_backend: Literal["neo4j", "memory"] = "neo4j"
    vector_index_name: str = "restaurant_agent_index"
    vector_node_label: str = "Chunk"
    vector_dimensions: int = 768
    vector_threshold: float = 0.9
    embedding_model: str = "nomic-embed-text"

    # Models (OpenAI-compatible endpoint, Ollama by default)
    llm_base_url: str = "http://localhost:11434/v1"
    llm_api_key: str = "ollama"
    anthropic_api_key: str | None = None
    llm_max_retries: int = 2
    llm_timeout: float = 120.0

    # Query-coder model
    coder_model: str = "qwen2.5-coder"
    coder_temperature: float = 0.0
    coder_max_tokens: int = 1024

    # Narrator model
    nlp_model: str = "llama3.1"
    nlp_temperature: float = 0.0
    nlp_max_tokens: int = 1024

    # Prompts
    prompts_dir: Path = PACKAGE_ROOT / "prompts"

    # Session logging (markdown trace per pipeline run)
    session_logging: bool = False
    session_log_dir: Path = PACKAGE_ROOT.parent / "logs"

    # CORS
    allowed_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
