from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    document_root: Path = Path(".")
    download_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = Field(default=10, ge=1)
    pdf_max_chars: int = Field(default=12000, ge=1)

    max_image_bytes: int = Field(default=8 * 1024 * 1024, ge=1)
    analysis_concurrency: int = Field(default=3, ge=1)

    analysis_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_base_url: str = ""
    openai_timeout_seconds: int = 60
    openai_temperature: float = 0.1
    openai_max_tokens: int = 2000

    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    def configuration_warnings(self) -> list[str]:
        """List recommended settings that are missing or inconsistent."""
        warnings: list[str] = []
        if self.analysis_provider.lower() != "example" and not self.openai_api_key.strip():
            warnings.append(
                "OPENAI_API_KEY is not set: document analysis will be skipped"
            )
        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            warnings.append(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set together"
            )
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            warnings.append("LOG_LEVEL should be one of: DEBUG, INFO, WARNING, ERROR")
        return warnings
