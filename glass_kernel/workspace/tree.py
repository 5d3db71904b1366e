"""
Workspace Tree: user-organised folders over opaque scenario references.

Mutated by: folder / scenario management actions + drag-and-drop
Never reset by playback. Applies the pure transitions in
workspace.transitions to the single live WorkspaceState.
"""

import logging
from typing import Callable, Optional
from uuid import uuid4

from glass_kernel.catalog.store import ScenarioCatalog
from glass_kernel.events.publisher import StatePublisher
from glass_kernel.models.config import WorkspaceConfig
from glass_kernel.models.results import MutationResult
from glass_kernel.models.workspace import (
    DragKind,
    DragPayload,
    DropKind,
    DropTarget,
    Folder,
    WorkspaceState,
)
from glass_kernel.workspace import transitions

logger = logging.getLogger(__name__)


class WorkspaceTree:
    """
    Owns the live WorkspaceState.
    Invariant: every scenario id is in at most one folder, the unassigned
    pool or the hidden list. Never in two places.
    """

    def __init__(
        self,
        state: Optional[WorkspaceState] = None,
        config: Optional[WorkspaceConfig] = None,
    ):
        self.config = config or WorkspaceConfig()
        self._state = state.model_copy(deep=True) if state else WorkspaceState()
        self._publisher: StatePublisher[WorkspaceState] = StatePublisher()
        for name in self.config.initial_folders:
            self.create_folder(name)

    @classmethod
    def from_catalog(
        cls,
        catalog: ScenarioCatalog,
        config: Optional[WorkspaceConfig] = None,
    ) -> "WorkspaceTree":
        """A workspace with every catalog scenario in the unassigned pool."""
        config = config or WorkspaceConfig()
        ids = catalog.ids() if config.seed_from_catalog else []
        return cls(WorkspaceState(unassigned_ids=ids), config)

    # --- Read model ---

    @property
    def state(self) -> WorkspaceState:
        """The live state. Treat as read-only; use the mutators."""
        return self._state

    def subscribe(self, listener: Callable[[WorkspaceState], None]) -> Callable[[], None]:
        return self._publisher.subscribe(listener)

    def get_state_snapshot(self) -> dict:
        return self._state.model_dump(mode="json")

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        return self._state.get_folder(folder_id)

    def locate(self, scenario_id: str) -> Optional[str]:
        """Folder id, transitions.UNASSIGNED, transitions.HIDDEN, or None."""
        return transitions.locate(self._state, scenario_id)

    def display_title(self, scenario_id: str, fallback: str) -> str:
        """The user's override for a scenario title, else the fallback (catalog title)."""
        return self._state.title_overrides.get(scenario_id, fallback)

    # --- Folders ---

    def create_folder(self, name: str) -> Folder:
        self._state, folder = transitions.create_folder(
            self._state, f"folder_{uuid4().hex[:12]}", name
        )
        logger.info("Created folder %s (%s)", folder.id, name)
        self._publish()
        return folder

    def rename_folder(self, folder_id: str, name: str) -> MutationResult:
        return self._apply(transitions.rename_folder(self._state, folder_id, name), "rename folder", folder_id)

    def delete_folder(self, folder_id: str) -> MutationResult:
        result = self._apply(transitions.delete_folder(self._state, folder_id), "delete folder", folder_id)
        if result:
            logger.info("Deleted folder %s; contents moved to unassigned", folder_id)
        return result

    def toggle_folder_collapse(self, folder_id: str) -> MutationResult:
        return self._apply(transitions.toggle_folder_collapse(self._state, folder_id), "toggle folder", folder_id)

    def set_panel_collapsed(self, collapsed: bool) -> MutationResult:
        return self._apply(transitions.set_panel_collapsed(self._state, collapsed), "collapse panel", "")

    # --- Scenarios ---

    def rename_scenario(self, scenario_id: str, title: str) -> MutationResult:
        return self._apply(transitions.rename_scenario(self._state, scenario_id, title), "rename scenario", scenario_id)

    def move_scenario_to_folder(self, scenario_id: str, folder_id: Optional[str]) -> MutationResult:
        """Move to a folder, or to the unassigned pool when folder_id is None."""
        return self._apply(
            transitions.move_scenario(self._state, scenario_id, folder_id),
            "move scenario", scenario_id,
        )

    def hide_scenario(self, scenario_id: str) -> MutationResult:
        return self._apply(transitions.hide_scenario(self._state, scenario_id), "hide scenario", scenario_id)

    def restore_scenario(self, scenario_id: str) -> MutationResult:
        return self._apply(transitions.restore_scenario(self._state, scenario_id), "restore scenario", scenario_id)

    # --- Drag and drop ---

    def handle_drop(
        self, payload: Optional[DragPayload], target: Optional[DropTarget]
    ) -> MutationResult:
        """
        Only scenario → folder and scenario → unassigned zone are actionable.
        Folder drags, unknown zones and drops onto nothing are ignored.
        """
        if payload is None or target is None or payload.kind != DragKind.SCENARIO:
            return MutationResult.IGNORED
        if target.kind == DropKind.FOLDER:
            return self.move_scenario_to_folder(payload.id, target.id)
        if target.kind == DropKind.ZONE and target.id == self.config.unassigned_zone_id:
            return self.move_scenario_to_folder(payload.id, None)
        return MutationResult.IGNORED

    # --- Internal ---

    def _apply(self, transition: transitions.Transition, action: str, ref: str) -> MutationResult:
        new_state, result = transition
        if not result:
            logger.warning("Rejected %s %s: %s", action, ref, result.value)
            return result
        self._state = new_state
        self._publish()
        return result

    def _publish(self) -> None:
        self._publisher.publish(self._state)
