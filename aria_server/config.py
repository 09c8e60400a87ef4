from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

	OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
	MODEL_NAME: str = Field(default="gpt-4o-mini", description="LLM model name")
	OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="Chat completion API base URL")
	OPENAI_TIMEOUT_SECONDS: float = Field(default=60.0, description="Timeout for a single completion request")
	MAX_TOKENS: int = Field(default=800, description="Maximum tokens in a generated reply")
	TEMPERATURE: float = Field(default=0.7, description="Sampling temperature")

	ASSISTANT_NAME: str = Field(default="Aria", description="Assistant persona name")

	HOST: str = Field(default="0.0.0.0", description="Bind address")
	PORT: int = Field(default=3000, description="Listening port")
	STATIC_DIR: Path = Field(default=BASE_DIR / "public", description="Directory with the static site")
	ROOT_INDEX: Path = Field(default=BASE_DIR / "index.html", description="Fallback index document")
	APP_VERSION: str = Field(default="1.0", description="Version reported by /health")
	MAX_BODY_BYTES: int = Field(default=100 * 1024, description="Largest accepted chat request body")
	LOG_LEVEL: str = Field(default="INFO", description="Root log level")

	MAX_HISTORY_MESSAGES: int = Field(default=20, description="Messages kept per conversation")
	CONTEXT_MESSAGES: int = Field(default=6, description="Trailing messages sent as context")
	CONVERSATION_TTL_SECONDS: int = Field(default=60 * 60 * 24, description="TTL for conversations without activity")
	PURGE_INTERVAL_SECONDS: int = Field(default=60 * 60, description="Background purge interval in seconds")


settings = Settings()  # type: ignore
