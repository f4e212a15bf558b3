from pydantic_settings import BaseSettings


class MissingConfigurationError(RuntimeError):
    """A required setting is absent or empty."""


class Settings(BaseSettings):
    MONGODB_URI: str = ""
    MONGODB_DB: str | None = None
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000  # fail-fast window when buffering is off

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
