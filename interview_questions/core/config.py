from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional, Union
import os
import json


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./interview_questions.db"
    db_echo: bool = False
    seed_lookups: bool = True
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/api/v1"
    functions_prefix: str = "/functions/v1"
    # CORS origins - can be JSON array or comma-separated string
    cors_origins: Union[List[str], str] = ["*"]

    # Upstream speech / language API
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout: float = 30.0
    tts_model: str = "tts-1"
    tts_default_voice: str = "alloy"
    tts_response_format: str = "mp3"
    tts_chunk_size: int = 3072
    stt_model: str = "whisper-1"
    feedback_model: str = "gpt-4o-mini"

    # Question retrieval bounds
    generate_questions_limit: int = 2
    custom_questions_limit: int = 5

    # Client playback policy
    playback_max_retries: int = 2
    playback_retry_delay: float = 1.0
    playback_ready_timeout: float = 15.0

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list, accepting JSON or comma-separated strings."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]

    @property
    def has_openai_credentials(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, built on first use."""
    return Settings()
