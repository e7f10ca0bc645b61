"""
Inventory Classification Engine - Configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    BASE_DIR: Path = Path(__file__).parent
    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "data")
    DATABASE_PATH: Path = Field(default_factory=lambda: Path(__file__).parent / "data" / "inventory.db")
    LOG_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "logs")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # LLM
    LLM_PROVIDER: str = Field(default="openai", description="openai, glm or anthropic")
    LLM_MODEL: str = Field(default="", description="Empty = provider default")
    LLM_VERIFY_SSL: bool = Field(default=True)
    OPENAI_API_KEY: str = Field(default="")
    OPENAI_BASE_URL: str = Field(default="", description="Empty = api.openai.com")
    GLM_API_KEY: str = Field(default="", description="Z.AI API key")
    ANTHROPIC_API_KEY: str = Field(default="", description="Claude API key")

    # Embeddings (OpenAI-compatible endpoint)
    EMBEDDING_MODEL: str = Field(default="text-embedding-3-small")
    EMBEDDING_API_KEY: str = Field(default="", description="Falls back to OPENAI_API_KEY")
    EMBEDDING_BASE_URL: str = Field(default="")

    # Criterion scoring
    RETRIEVAL_TOP_K: int = Field(default=5, ge=1)
    RETRIEVAL_NUM_CANDIDATES: int = Field(default=50, ge=1)
    SCORING_MAX_CONCURRENCY: int = Field(default=8, ge=1)
    SCORING_REQUIRE_CONTEXT: bool = Field(default=True, description="Fail items with no reviews")
    SCORER_TEMPERATURE: float = Field(default=0.5)
    SCORER_MAX_TOKENS: int = Field(default=100)
    GENERATOR_TEMPERATURE: float = Field(default=0.7)
    GENERATOR_MAX_TOKENS: int = Field(default=1000)
    GENERATOR_MAX_RETRIES: int = Field(default=3, ge=1)

    # ABC classification (cumulative share thresholds)
    ABC_THRESHOLD_A: float = Field(default=0.60)
    ABC_THRESHOLD_B: float = Field(default=0.85)

    # API
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def ensure_directories():
    """Ensure all required directories exist."""
    dirs = [
        settings.DATA_DIR,
        settings.LOG_DIR,
    ]
    for dir_path in dirs:
        dir_path.mkdir(parents=True, exist_ok=True)
