from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # FastAPI
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DB_URL: str = "sqlite:///./predictions.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Grading
    DEFAULT_CREDIT_UNITS: int = 3

    class Config:
        env_file = ".env"


settings = Settings()
