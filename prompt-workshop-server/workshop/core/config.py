"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./prompt_workshop.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class CompletionSettings(BaseModel):
    """Connection details for the OpenAI-compatible completion endpoint."""

    provider: Literal["openai", "azure", "ollama"] = "openai"
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-3.5-turbo"
    api_version: str = "2024-06-01"
    timeout_seconds: float = Field(default=120.0, gt=0)
    temperature: Optional[float] = None

    @property
    def is_configured(self) -> bool:
        if self.provider == "ollama":
            return True
        if self.provider == "azure":
            return bool(self.api_key and self.base_url)
        return bool(self.api_key)

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.provider == "ollama":
            return "http://localhost:11434/v1"
        return "https://api.openai.com/v1"


class ExecutionSettings(BaseModel):
    max_retries: int = Field(default=3, ge=0)
    base_delay_seconds: float = Field(default=1.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)


class SuggestionSettings(BaseModel):
    max_tags: int = Field(default=3, ge=0)
    use_completion: bool = True


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Prompt Workshop"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    completion: CompletionSettings = CompletionSettings()
    execution: ExecutionSettings = ExecutionSettings()
    suggestions: SuggestionSettings = SuggestionSettings()
    logging: LoggingSettings = LoggingSettings()

    static_dir: Path = Path("workshop/web/static")
    template_dir: Path = Path("workshop/web/templates")

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port


@lru_cache()
def get_settings() -> Settings:
    return Settings()
