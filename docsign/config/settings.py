from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # Size of the on-screen render that field coordinates are recorded against.
    preview_width: int = Field(default=600, gt=0)
    preview_height: int = Field(default=800, gt=0)

    summary_page_width: float = Field(default=612.0, gt=0)
    summary_page_height: float = Field(default=792.0, gt=0)

    output_suffix: str = "_signed"
