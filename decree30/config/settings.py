from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    ai_provider: str = "gemini"
    api_key: str = ""
    ai_model_name: str = ""
    ai_base_url: str = ""
    ai_timeout_seconds: int = 120
    ai_temperature: float = Field(default=0.2, ge=0.0, le=0.2)

    pdf_engine: str = "inline"

    output_dir: str = "."
