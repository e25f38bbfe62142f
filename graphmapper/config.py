from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        env_prefix="GRAPHMAPPER_",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────
    app_name: str = "GraphMapper"
    app_version: str = "0.1.0"
    debug: bool = False

    # ── Traversal bounds ─────────────────────────────────
    default_max_length: int = Field(default=10, ge=1)
    default_max_depth: int = Field(default=5, ge=1)
    # Upper bound accepted from API callers for max_length / max_depth.
    max_traversal_bound: int = Field(default=20, ge=1)

    # ── Analysis ─────────────────────────────────────────
    critical_fan_out: int = Field(default=5, ge=0)
    # Path enumeration stops once this many paths are recorded.
    max_paths: int = Field(default=10_000, ge=1)

    # ── Server ───────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
