from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path
from typing import List

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Listen address (HOST / PORT)
    host: str = "0.0.0.0"
    port: int = 3000

    # Static site served for every unmatched path
    public_dir: Path = PACKAGE_DIR / "public"
    default_document: str = "index.html"
    static_cache_control: str = "public, max-age=3600"

    # Flat JSON file holding contact submissions
    message_store: Path = Path("data") / "messages.json"
    max_body_bytes: int = 1_000_000

    # CORS settings
    allowed_origins: List[str] = ["*"]

    log_level: str = "INFO"

    @property
    def public_root(self) -> Path:
        """Canonical public root used by the traversal guard"""
        return self.public_dir.resolve()


@lru_cache
def get_settings():
    return Settings()
