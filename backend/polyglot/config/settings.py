from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    # Gemini
    GEMINI_API_KEY: str | None = Field(
        None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY"),
    )
    TRANSLATION_MODEL: str = Field("gemini-3-flash-preview")
    TTS_MODEL: str = Field("gemini-2.5-flash-preview-tts")

    # History persistence ("file" or "redis")
    HISTORY_BACKEND: str = Field("file")
    HISTORY_FILE: str = Field("data/translation_history.json")
    HISTORY_KEY: str = Field("translation_history")

    # Redis
    REDIS_HOST: str = Field("redis")
    REDIS_PORT: int = Field(6379)
    REDIS_PASSWORD: str | None = Field(None)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(8000)
    DEBUG: bool = Field(False)
    LOG_LEVEL: str = Field("INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


settings = Settings()
