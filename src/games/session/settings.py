"""Game host configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from games.logic.rng import validate_seed_hex


class HostSettings(BaseSettings):
    model_config = {"env_prefix": "ARCADE_"}

    # default tick interval for engines started without an explicit speed
    tick_interval_ms: int = Field(default=1000, gt=0)
    log_dir: str = "logs/arcade"
    # fixed hex seed shared by every engine the host creates; random when unset
    seed: str | None = None
    # recent log entries kept per game for display
    display_buffer_size: int = Field(default=100, gt=0)

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v
