"""Configuration for the push/pull transport."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment."""

    base_url: str = "http://localhost:7777"
    push_path: str = "/time"
    pull_path: str = "/sse/{participant_id}"
    connect_timeout: float = 10.0
    write_timeout: float = 10.0
    push_read_timeout: float = 30.0

    # Identity is provisioned elsewhere; this only carries it in.
    participant_id: str | None = None

    model_config = SettingsConfigDict(env_prefix="AVAILABILITY_GRID_", env_file=".env")

    def pull_url_path(self, participant_id: str) -> str:
        return self.pull_path.format(participant_id=participant_id)
