from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "CS Genius"
    debug: bool = False

    # Product slug used in backup file names
    product_slug: str = "cs_genius"

    # Closed list of product tags; the last entry is the catch-all
    app_options: List[str] = ["辞书", "Test", "阅读", "Kana", "会话", "Web", "活动", "通用"]
    default_app: str = "通用"

    # Seed the knowledge base with the two sample entries on startup
    seed_sample_data: bool = True

    # OpenAI (via gen_ai_hub proxy)
    # No API key needed - uses gen_ai_hub proxy
    openai_model: str = "gpt-4o"
    extraction_temperature: float = 0.2  # Lower temp for factual extraction
    temperature: float = 0.7

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
