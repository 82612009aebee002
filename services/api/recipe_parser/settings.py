from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # Server (recipe-parser serve)
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Parsing
    strict_parsing: bool = False
    default_unit_system: Literal["metric", "us_customary"] = "us_customary"
    max_input_chars: int = 200_000

    # Rate limiting (per client IP)
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
