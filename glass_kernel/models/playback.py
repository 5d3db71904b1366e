"""Playback State: the live conversation a scenario or the user drives."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from glass_kernel.models.catalog import ConfidenceLevel, Persona, PlanStep


class TurnRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class PlaybackPhase(str, Enum):
    """
    Orchestrator states:
      IDLE → USER_TURN_PENDING → THINKING → REVEALING_THOUGHTS → RESPONDING → DONE
    A scenario load enters THINKING directly, or stays IDLE if nothing is scripted.
    """
    IDLE = "idle"
    USER_TURN_PENDING = "user_turn_pending"
    THINKING = "thinking"
    REVEALING_THOUGHTS = "revealing_thoughts"
    RESPONDING = "responding"
    DONE = "done"


class ConversationTurn(BaseModel):
    """A single entry in the append-only conversation."""

    id: str
    role: TurnRole
    text: str
    created_at: datetime
    persona: Optional[Persona] = None       # Assistant turns only


class Plan(BaseModel):
    """Session-owned copy of a scenario plan. Steps are freely editable."""

    title: str
    steps: List[PlanStep] = []


class MemoryItem(BaseModel):
    id: str
    key: str
    value: str
    tags: List[str] = []


class PlaybackState(BaseModel):
    """Everything the conversation panel renders from."""

    current_scenario_id: Optional[str] = None
    persona: Persona = Persona.UNIVERSAL
    conversation: List[ConversationTurn] = []
    thinking: bool = False
    thoughts: List[str] = []
    plan: Optional[Plan] = None
    memories: List[MemoryItem] = []
    confidence_visible: bool = False
    confidence_level: Optional[ConfidenceLevel] = None
    phase: PlaybackPhase = PlaybackPhase.IDLE
    generation: int = 0                     # Bumped by every load / send
