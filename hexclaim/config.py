from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_PLAYER_COLORS = ("indianred", "cadetblue")


class PlayerConfig(BaseModel):
    id: int = Field(..., ge=0)
    color: str = Field(..., min_length=1)


def _default_players() -> list[PlayerConfig]:
    return [PlayerConfig(id=i, color=c) for i, c in enumerate(DEFAULT_PLAYER_COLORS)]


class GameConfig(BaseModel):
    """Settings fixed at game start."""

    columns: int = Field(9, ge=1, le=64)
    rows: int = Field(9, ge=1, le=64)
    # Number of protection indicator slots per field; a direct claim protects for block_capacity + 1 rounds.
    block_capacity: int = Field(5, ge=0, le=32)
    players: list[PlayerConfig] = Field(default_factory=_default_players)
    # Seconds to wait before each cascaded flip is shown. 0 disables pacing.
    step_delay: float = Field(0.5, ge=0.0)
    max_cascade_flips: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_players(self) -> "GameConfig":
        if len(self.players) < 2:
            raise ValueError("At least 2 players required")
        ids = [p.id for p in self.players]
        if ids != list(range(len(ids))):
            raise ValueError("Player ids must be sequential and zero-based")
        return self


def load_config(*, env_file: Path | None = None) -> GameConfig:
    """Build a GameConfig from HEXCLAIM_* environment variables.

    If `env_file` exists it is loaded first (without overriding the real environment).
    """

    if env_file is not None and env_file.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_file, override=False)

    values: dict[str, object] = {}
    for key, name in (
        ("columns", "HEXCLAIM_COLUMNS"),
        ("rows", "HEXCLAIM_ROWS"),
        ("block_capacity", "HEXCLAIM_BLOCK_CAPACITY"),
        ("step_delay", "HEXCLAIM_STEP_DELAY"),
        ("max_cascade_flips", "HEXCLAIM_MAX_CASCADE_FLIPS"),
    ):
        raw = os.environ.get(name)
        if raw is not None and raw.strip():
            values[key] = raw.strip()

    colors = os.environ.get("HEXCLAIM_PLAYER_COLORS")
    if colors:
        values["players"] = [
            {"id": i, "color": c.strip()} for i, c in enumerate(s for s in colors.split(",") if s.strip())
        ]

    return GameConfig.model_validate(values)
