"""Configuration management"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# load .env before the settings groups read the environment
load_dotenv()


class GeminiConfig(BaseSettings):
    """Gemini API configuration"""
    model_config = SettingsConfigDict(extra="ignore")

    api_key: str = Field("", validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"))
    base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        validation_alias="GEMINI_BASE_URL",
    )
    model: str = Field("gemini-2.5-flash", validation_alias="GEMINI_MODEL")
    timeout: float = Field(120.0, validation_alias="GEMINI_TIMEOUT")
    temperature: float = Field(0.2, validation_alias="GEMINI_TEMPERATURE")


class ScreeningConfig(BaseSettings):
    """Screening and comparison limits"""
    model_config = SettingsConfigDict(extra="ignore")

    max_file_size_mb: int = Field(10, validation_alias="MAX_FILE_SIZE_MB")
    min_compare_candidates: int = Field(2, validation_alias="MIN_COMPARE_CANDIDATES")
    max_compare_candidates: int = Field(5, validation_alias="MAX_COMPARE_CANDIDATES")


class AppConfig(BaseSettings):
    """Application settings"""
    model_config = SettingsConfigDict(extra="ignore")

    name: str = Field("Resume Screener", validation_alias="APP_NAME")
    version: str = Field("1.0.0", validation_alias="APP_VERSION")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_dir: str = Field("logs", validation_alias="LOG_DIR")


class Settings:
    """Global settings container"""

    def __init__(self):
        self.app = AppConfig()
        self.gemini = GeminiConfig()
        self.screening = ScreeningConfig()


# global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Return the global settings"""
    return settings


def get_config() -> Settings:
    """Alias kept for callers that read configuration only"""
    return settings
