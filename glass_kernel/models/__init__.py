"""Glass Kernel data models."""

from glass_kernel.models.catalog import (
    ConfidenceLevel,
    MemorySeed,
    Persona,
    PlanDefinition,
    PlanStep,
    ScenarioCatalogEntry,
    ScriptedResponse,
    StepStatus,
)
from glass_kernel.models.config import PlaybackConfig, WorkspaceConfig
from glass_kernel.models.playback import (
    ConversationTurn,
    MemoryItem,
    Plan,
    PlaybackPhase,
    PlaybackState,
    TurnRole,
)
from glass_kernel.models.results import MutationResult
from glass_kernel.models.workspace import (
    DragKind,
    DragPayload,
    DropKind,
    DropTarget,
    Folder,
    WorkspaceState,
)

__all__ = [
    "ConfidenceLevel",
    "ConversationTurn",
    "DragKind",
    "DragPayload",
    "DropKind",
    "DropTarget",
    "Folder",
    "MemoryItem",
    "MemorySeed",
    "MutationResult",
    "Persona",
    "Plan",
    "PlanDefinition",
    "PlanStep",
    "PlaybackConfig",
    "PlaybackPhase",
    "PlaybackState",
    "ScenarioCatalogEntry",
    "ScriptedResponse",
    "StepStatus",
    "TurnRole",
    "WorkspaceConfig",
    "WorkspaceState",
]
