"""Application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase REST access
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_schema: str = "public"
    request_timeout: float = 10.0

    # Table names
    championships_table: str = "championships"
    championship_rallies_table: str = "championship_rallies"
    rally_results_table: str = "rally_results"
    users_table: str = "users"
    manual_participants_table: str = "manual_participants"
    team_totals_table: str = "team_rally_totals"
    team_members_table: str = "team_rally_results"

    # Output
    output_bucket: str = ""
    output_prefix: str = "standings"
    output_path: str = "output"
    snapshot_path: str = ""

    # Scoring
    team_contributor_count: int = Field(default=3, ge=1)

    # Feature flags
    debug: bool = False
    dry_run: bool = False

    @property
    def has_supabase(self) -> bool:
        """Whether Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_key)

    @property
    def output_dir(self) -> Path:
        """Get output directory as Path object."""
        return Path(self.output_path)

    @property
    def snapshot_file(self) -> Path | None:
        """Get snapshot JSON path, if configured."""
        if not self.snapshot_path:
            return None
        return Path(self.snapshot_path)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
