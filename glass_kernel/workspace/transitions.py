"""
Workspace transitions: pure functions (state, input) → (state', result).

No function here mutates its input. Each returns a new WorkspaceState (the
input itself when nothing changed) and the MutationResult describing what
happened. WorkspaceTree owns the live state and applies these.
"""

from typing import Optional, Tuple

from glass_kernel.models.results import MutationResult
from glass_kernel.models.workspace import Folder, WorkspaceState

Transition = Tuple[WorkspaceState, MutationResult]

UNASSIGNED = "__unassigned__"
HIDDEN = "__hidden__"


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _detach(state: WorkspaceState, scenario_id: str) -> WorkspaceState:
    """Copy of state with scenario_id removed from every location it may be in."""
    new = state.model_copy(deep=True)
    new.unassigned_ids = [i for i in new.unassigned_ids if i != scenario_id]
    new.hidden_ids = [i for i in new.hidden_ids if i != scenario_id]
    for folder in new.folders:
        folder.scenario_ids = [i for i in folder.scenario_ids if i != scenario_id]
    return new


def create_folder(state: WorkspaceState, folder_id: str, name: str) -> Tuple[WorkspaceState, Folder]:
    folder = Folder(id=folder_id, name=name)
    new = state.model_copy(deep=True)
    new.folders.append(folder)
    return new, folder


def rename_folder(state: WorkspaceState, folder_id: str, name: str) -> Transition:
    if _is_blank(name):
        return state, MutationResult.INVALID_INPUT
    if state.get_folder(folder_id) is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    new = state.model_copy(deep=True)
    new.get_folder(folder_id).name = name
    return new, MutationResult.APPLIED


def rename_scenario(state: WorkspaceState, scenario_id: str, title: str) -> Transition:
    """Display override only. Works for any id, placed or not."""
    if _is_blank(title):
        return state, MutationResult.INVALID_INPUT
    new = state.model_copy(deep=True)
    new.title_overrides[scenario_id] = title
    return new, MutationResult.APPLIED


def delete_folder(state: WorkspaceState, folder_id: str) -> Transition:
    """Remove a folder and reparent its contents to the end of the unassigned pool."""
    folder = state.get_folder(folder_id)
    if folder is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    new = state.model_copy(deep=True)
    new.folders = [f for f in new.folders if f.id != folder_id]
    new.unassigned_ids.extend(
        i for i in folder.scenario_ids if i not in new.unassigned_ids
    )
    return new, MutationResult.APPLIED


def move_scenario(state: WorkspaceState, scenario_id: str, folder_id: Optional[str]) -> Transition:
    """
    Move a scenario to a folder, or to the unassigned pool when folder_id is None.
    A missing target folder is rejected and the scenario stays where it was.
    Ids the workspace does not hold are rejected too.
    """
    if locate(state, scenario_id) is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    if folder_id is not None and state.get_folder(folder_id) is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    new = _detach(state, scenario_id)
    if folder_id is None:
        new.unassigned_ids.append(scenario_id)
    else:
        new.get_folder(folder_id).scenario_ids.append(scenario_id)
    return new, MutationResult.APPLIED


def hide_scenario(state: WorkspaceState, scenario_id: str) -> Transition:
    if locate(state, scenario_id) is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    new = _detach(state, scenario_id)
    new.hidden_ids.append(scenario_id)
    return new, MutationResult.APPLIED


def restore_scenario(state: WorkspaceState, scenario_id: str) -> Transition:
    if scenario_id not in state.hidden_ids:
        return state, MutationResult.UNKNOWN_REFERENCE
    return move_scenario(state, scenario_id, None)


def toggle_folder_collapse(state: WorkspaceState, folder_id: str) -> Transition:
    if state.get_folder(folder_id) is None:
        return state, MutationResult.UNKNOWN_REFERENCE
    new = state.model_copy(deep=True)
    folder = new.get_folder(folder_id)
    folder.collapsed = not folder.collapsed
    return new, MutationResult.APPLIED


def set_panel_collapsed(state: WorkspaceState, collapsed: bool) -> Transition:
    return state.model_copy(update={"panel_collapsed": collapsed}), MutationResult.APPLIED


def locate(state: WorkspaceState, scenario_id: str) -> Optional[str]:
    """
    Where a scenario currently lives: a folder id, UNASSIGNED, HIDDEN, or
    None if the workspace does not know it.
    """
    if scenario_id in state.unassigned_ids:
        return UNASSIGNED
    for folder in state.folders:
        if scenario_id in folder.scenario_ids:
            return folder.id
    if scenario_id in state.hidden_ids:
        return HIDDEN
    return None
