"""Workspace State: folders and the unassigned pool of scenario references."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class Folder(BaseModel):
    """A user-defined folder. Holds scenario ids, never scenario content."""

    id: str
    name: str
    collapsed: bool = False
    scenario_ids: List[str] = []


class WorkspaceState(BaseModel):
    """
    Partition of known scenario ids across folders, the unassigned pool and
    the hidden list. Each id lives in at most one of those places.
    """

    folders: List[Folder] = []
    unassigned_ids: List[str] = []
    hidden_ids: List[str] = []
    panel_collapsed: bool = False
    title_overrides: Dict[str, str] = {}

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        return next((f for f in self.folders if f.id == folder_id), None)


class DragKind(str, Enum):
    SCENARIO = "scenario"
    FOLDER = "folder"


class DropKind(str, Enum):
    FOLDER = "folder"
    ZONE = "zone"


class DragPayload(BaseModel):
    """What is being dragged."""

    kind: DragKind
    id: str


class DropTarget(BaseModel):
    """Where it was dropped. A zone is identified by its sentinel id."""

    kind: DropKind
    id: str
