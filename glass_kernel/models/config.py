"""Playback and workspace configuration."""

from typing import List

from pydantic import BaseModel, Field, model_validator

from glass_kernel.models.catalog import Persona


class PlaybackConfig(BaseModel):
    """Timing and defaults for the Playback Orchestrator."""

    thought_delay_seconds: float = Field(ge=0, default=1.0)
    response_delay_seconds: float = Field(ge=0, default=2.5)   # Counted from the thought reveal
    reply_delay_min_seconds: float = Field(ge=0, default=1.5)
    reply_delay_max_seconds: float = Field(ge=0, default=2.5)
    default_persona: Persona = Persona.UNIVERSAL
    default_memory_key: str = "New Memory"

    @model_validator(mode="after")
    def check_reply_window(self) -> "PlaybackConfig":
        if self.reply_delay_min_seconds > self.reply_delay_max_seconds:
            raise ValueError(
                "reply_delay_min_seconds must not exceed reply_delay_max_seconds"
            )
        return self


class WorkspaceConfig(BaseModel):
    """Configuration for the Workspace Tree."""

    unassigned_zone_id: str = "unassigned-zone"
    seed_from_catalog: bool = True          # Put every catalog id in the unassigned pool
    initial_folders: List[str] = []         # Folder names created at startup
