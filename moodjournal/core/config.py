"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Mood Journal"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./moodjournal.db"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    # Fixed roster seeded by init_db ("username:Display Name:emoji")
    USER_ROSTER: Union[List[str], str] = [
        "ana:Ana:🌻",
        "luis:Luis:🐢",
        "sofia:Sofía:🦋",
    ]

    @field_validator("CORS_ORIGINS", "USER_ROSTER", "IMAGE_PROVIDERS", "GEMINI_IMAGE_MODELS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse list settings from comma-separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    # Image generation, tried in this order; the placeholder always runs last
    IMAGE_PROVIDERS: Union[List[str], str] = ["gemini", "dalle", "pollinations"]
    IMAGE_REQUEST_TIMEOUT: float = 30.0

    # Google Generative Language API
    GEMINI_API_KEY: str = ""
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    GEMINI_IMAGE_MODELS: Union[List[str], str] = [
        "gemini-2.5-flash-image-preview",
        "gemini-2.0-flash-exp",
    ]

    # OpenAI (DALL·E)
    OPENAI_API_KEY: str = ""
    OPENAI_IMAGES_URL: str = "https://api.openai.com/v1/images/generations"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    OPENAI_IMAGE_SIZE: str = "1024x1024"

    # Pollinations (free, no key)
    POLLINATIONS_API_URL: str = "https://image.pollinations.ai/prompt"

    # Placeholder images
    PLACEHOLDER_IMAGE_URL: str = "https://picsum.photos/seed/{seed}/400/300"
    DEFAULT_MOOD_IMAGE: str = "https://images.unsplash.com/photo-1518791841217-8f162f1e1131?w=400&h=300&fit=crop"

    # History
    HISTORY_DAYS: int = 7
    HISTORY_LIMIT: int = 20
    CHART_DAYS: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
