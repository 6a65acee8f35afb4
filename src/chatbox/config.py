"""Configuration for the Chatbox backend."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Chatbox configuration settings."""

    # Persistent store
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/chatbox.db"

    # Session tokens
    JWT_SECRET: str = "dev_secret_change_in_production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # bcrypt cost factor
    BCRYPT_ROUNDS: int = 10

    # External completion API
    COMPLETION_API_URL: str = "https://api.openai.com/v1"
    COMPLETION_API_KEY: str = ""
    COMPLETION_MODEL: str = "gpt-3.5-turbo-instruct"
    COMPLETION_TEMPERATURE: float = 0.0
    COMPLETION_MAX_TOKENS: int = 3000
    COMPLETION_TIMEOUT_SECONDS: float = 120.0

    # HTTP server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
