from functools import lru_cache
from typing import Literal, List

from pydantic import AliasChoices, AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class TMDBSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TMDB_", env_file=".env", extra="ignore")
    api_key: SecretStr = SecretStr("")
    api_base_url: AnyHttpUrl = "https://api.themoviedb.org/3"
    certification_country: str = "US"  # release_dates entries kept for this jurisdiction


class StreamingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RAPIDAPI_", env_file=".env", extra="ignore")
    key: SecretStr = SecretStr("")
    host: str = "streaming-availability.p.rapidapi.com"
    api_base_url: AnyHttpUrl = "https://streaming-availability.p.rapidapi.com"
    country: str = "us"
    output_language: str = "en"


class GeocodingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GEO_", env_file=".env", extra="ignore")
    api_key: SecretStr = SecretStr("")
    api_base_url: AnyHttpUrl = "https://geocode.maps.co"


class WeatherSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WEATHER_", env_file=".env", extra="ignore")
    api_key: SecretStr = SecretStr("")
    api_base_url: AnyHttpUrl = "https://api.openweathermap.org/data/2.5"
    units: Literal["imperial"] = "imperial"  # display string is always rendered in °F


class OpenAISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENAI_", env_file=".env", extra="ignore")
    api_key: SecretStr = SecretStr("")
    api_base_url: AnyHttpUrl = "https://api.openai.com/v1"
    chat_model: str = "gpt-3.5-turbo"
    completion_model: str = "gpt-3.5-turbo-instruct"
    temperature: float = 0.7
    recommendation_max_tokens: int = 200
    ask_max_tokens: int = 150


class Settings(BaseSettings):

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    verify_ssl: bool = True

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = Field(5000, validation_alias=AliasChoices("APP_API_PORT", "PORT"))
    api_reload: bool = False
    api_workers: int = 1  # the response cache is per process
    cors_origins: List[str] = ["*"]

    # ---- caching / upstream calls ----
    cache_ttl_seconds: int = 12 * 60 * 60
    weather_cache_ttl_seconds: int = 0  # recomputed every call unless set
    upstream_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )

    # ---- integrations (each reads its own env prefix) ----
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    streaming: StreamingSettings = Field(default_factory=StreamingSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
