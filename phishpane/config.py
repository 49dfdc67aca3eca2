"""Application configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisEndpoint(BaseModel):
    """Where the analysis service lives. Fixed once the client is built."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    timeout_seconds: float | None = 30.0

    @property
    def analyze_url(self) -> str:
        return f"{self.base_url}/analyze"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "phishpane"
    app_version: str = "0.1.0"
    debug: bool = False

    # Analysis service (Flask backend exposing POST /analyze)
    analysis_base_url: str = "http://localhost:5000"
    analysis_timeout_seconds: float = 30.0

    # Default for the alternate backend toggle
    use_claude: bool = False

    def analysis_endpoint(self) -> AnalysisEndpoint:
        """Build the immutable endpoint value handed to the analysis client."""
        return AnalysisEndpoint(
            base_url=self.analysis_base_url.rstrip("/"),
            timeout_seconds=self.analysis_timeout_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
