from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, BUDGET_WARN_PCT, ASSISTANT_API_KEY).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Roam"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "roam.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Budget progress: percent spent above this value (and up to 100) is WARN
    budget_warn_pct: float = 75.0

    # Assistant (external text generation)
    assistant_api_key: Optional[str] = None
    assistant_model: str = "gemini-2.5-flash"
    assistant_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    http_timeout_seconds: float = 10.0

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if not (0 < self.budget_warn_pct < 100):
            raise ValueError(
                f"Unsupported budget_warn_pct {self.budget_warn_pct}: require 0 < warn < 100"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
