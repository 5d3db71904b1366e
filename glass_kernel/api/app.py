"""
Glass Kernel API: FastAPI endpoints.

Exposes the kernel's read models and mutators for a presentation layer:
- Scenario catalog listing (with display-title overrides)
- Playback: load, persona, messages, plan, memories
- Workspace: folders, scenario placement, drag-and-drop, panel state

Every endpoint is async so all mutations and deferred reveal stages run on
the event loop thread.
"""

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from glass_kernel.catalog.store import ScenarioCatalog
from glass_kernel.models.catalog import PlanStep
from glass_kernel.models.config import PlaybackConfig, WorkspaceConfig
from glass_kernel.models.results import MutationResult
from glass_kernel.models.workspace import DragPayload, DropTarget
from glass_kernel.playback.orchestrator import PlaybackOrchestrator
from glass_kernel.playback.responses import ResponsePool
from glass_kernel.playback.scheduler import DeferredScheduler
from glass_kernel.workspace.tree import WorkspaceTree


# --- Request/Response Models ---

class LoadScenarioRequest(BaseModel):
    scenario_id: str


class PersonaRequest(BaseModel):
    persona: str


class MessageRequest(BaseModel):
    text: str


class PlanUpdateRequest(BaseModel):
    steps: List[PlanStep]


class PlanStepCreateRequest(BaseModel):
    label: str


class PlanStepStatusRequest(BaseModel):
    status: str


class MemoryCreateRequest(BaseModel):
    value: str
    tags: List[str] = []


class MemoryUpdateRequest(BaseModel):
    value: str


class FolderCreateRequest(BaseModel):
    name: str


class RenameRequest(BaseModel):
    name: str


class MoveRequest(BaseModel):
    folder_id: Optional[str] = None     # None → unassigned pool


class PanelRequest(BaseModel):
    collapsed: bool


class DropRequest(BaseModel):
    payload: Optional[DragPayload] = None
    target: Optional[DropTarget] = None


_STATUS_FOR_RESULT = {
    MutationResult.UNKNOWN_REFERENCE: 404,
    MutationResult.INVALID_INPUT: 422,
    MutationResult.IGNORED: 409,
}


def _check(result: MutationResult, detail: str) -> None:
    """Turn a rejected mutation into the matching HTTP error."""
    if not result:
        raise HTTPException(_STATUS_FOR_RESULT[result], f"{detail}: {result.value}")


# --- Application Factory ---

def create_app(
    catalog: Optional[ScenarioCatalog] = None,
    scheduler: Optional[DeferredScheduler] = None,
    playback_config: Optional[PlaybackConfig] = None,
    workspace_config: Optional[WorkspaceConfig] = None,
    responses: Optional[ResponsePool] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.orchestrator.shutdown()

    app = FastAPI(
        title="Glass Kernel API",
        description="Scenario playback and workspace state core",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Initialize components
    cat = catalog or ScenarioCatalog.load_default()
    orchestrator = PlaybackOrchestrator(
        catalog=cat,
        scheduler=scheduler,
        config=playback_config,
        responses=responses,
    )
    workspace = WorkspaceTree.from_catalog(cat, workspace_config)

    # Store components on app state for access in endpoints
    app.state.catalog = cat
    app.state.orchestrator = orchestrator
    app.state.workspace = workspace

    # === CATALOG ===

    @app.get("/scenarios")
    async def list_scenarios():
        """All catalog scenarios, titled as the user sees them."""
        return [
            {
                "id": entry.id,
                "title": workspace.display_title(entry.id, entry.title),
                "persona": entry.resolved_persona(orchestrator.config.default_persona).value,
                "description": entry.description,
                "location": workspace.locate(entry.id),
            }
            for entry in cat.entries()
        ]

    # === PLAYBACK ===

    @app.get("/playback")
    async def get_playback():
        """Current playback state snapshot."""
        return orchestrator.get_state_snapshot()

    @app.post("/playback/load")
    async def load_scenario(req: LoadScenarioRequest):
        _check(orchestrator.load_scenario(req.scenario_id), "Scenario not loaded")
        return orchestrator.get_state_snapshot()

    @app.put("/playback/persona")
    async def set_persona(req: PersonaRequest):
        _check(orchestrator.set_persona(req.persona), "Persona not set")
        return orchestrator.get_state_snapshot()

    @app.post("/playback/messages")
    async def send_message(req: MessageRequest):
        _check(orchestrator.send_message(req.text), "Message not sent")
        return orchestrator.get_state_snapshot()

    @app.put("/playback/plan")
    async def update_plan(req: PlanUpdateRequest):
        _check(orchestrator.update_plan(req.steps), "Plan not updated")
        return orchestrator.get_state_snapshot()["plan"]

    @app.post("/playback/plan/steps")
    async def add_plan_step(req: PlanStepCreateRequest):
        _check(orchestrator.add_plan_step(req.label), "Step not added")
        return orchestrator.get_state_snapshot()["plan"]

    @app.patch("/playback/plan/steps/{step_id}")
    async def set_plan_step_status(step_id: str, req: PlanStepStatusRequest):
        _check(orchestrator.set_plan_step_status(step_id, req.status), "Step not updated")
        return orchestrator.get_state_snapshot()["plan"]

    @app.delete("/playback/plan/steps/{step_id}")
    async def remove_plan_step(step_id: str):
        _check(orchestrator.remove_plan_step(step_id), "Step not removed")
        return orchestrator.get_state_snapshot()["plan"]

    @app.post("/playback/memories")
    async def create_memory(req: MemoryCreateRequest):
        item = orchestrator.create_memory(req.value, req.tags)
        return item.model_dump(mode="json")

    @app.patch("/playback/memories/{memory_id}")
    async def update_memory(memory_id: str, req: MemoryUpdateRequest):
        _check(orchestrator.update_memory(memory_id, req.value), "Memory not updated")
        return {"status": "updated", "memory_id": memory_id}

    @app.delete("/playback/memories/{memory_id}")
    async def delete_memory(memory_id: str):
        _check(orchestrator.delete_memory(memory_id), "Memory not deleted")
        return {"status": "deleted", "memory_id": memory_id}

    # === WORKSPACE ===

    @app.get("/workspace")
    async def get_workspace():
        """Current workspace state snapshot."""
        return workspace.get_state_snapshot()

    @app.post("/workspace/folders")
    async def create_folder(req: FolderCreateRequest):
        return workspace.create_folder(req.name).model_dump(mode="json")

    @app.patch("/workspace/folders/{folder_id}")
    async def rename_folder(folder_id: str, req: RenameRequest):
        _check(workspace.rename_folder(folder_id, req.name), "Folder not renamed")
        return workspace.get_folder(folder_id).model_dump(mode="json")

    @app.delete("/workspace/folders/{folder_id}")
    async def delete_folder(folder_id: str):
        _check(workspace.delete_folder(folder_id), "Folder not deleted")
        return workspace.get_state_snapshot()

    @app.post("/workspace/folders/{folder_id}/toggle")
    async def toggle_folder(folder_id: str):
        _check(workspace.toggle_folder_collapse(folder_id), "Folder not toggled")
        return workspace.get_folder(folder_id).model_dump(mode="json")

    @app.put("/workspace/scenarios/{scenario_id}/folder")
    async def move_scenario(scenario_id: str, req: MoveRequest):
        _check(workspace.move_scenario_to_folder(scenario_id, req.folder_id), "Scenario not moved")
        return workspace.get_state_snapshot()

    @app.patch("/workspace/scenarios/{scenario_id}")
    async def rename_scenario(scenario_id: str, req: RenameRequest):
        if scenario_id not in cat:
            raise HTTPException(404, "Scenario not found")
        _check(workspace.rename_scenario(scenario_id, req.name), "Scenario not renamed")
        return {"id": scenario_id, "title": workspace.display_title(scenario_id, req.name)}

    @app.delete("/workspace/scenarios/{scenario_id}")
    async def hide_scenario(scenario_id: str):
        _check(workspace.hide_scenario(scenario_id), "Scenario not removed")
        return workspace.get_state_snapshot()

    @app.post("/workspace/scenarios/{scenario_id}/restore")
    async def restore_scenario(scenario_id: str):
        _check(workspace.restore_scenario(scenario_id), "Scenario not restored")
        return workspace.get_state_snapshot()

    @app.put("/workspace/panel")
    async def set_panel(req: PanelRequest):
        workspace.set_panel_collapsed(req.collapsed)
        return {"panel_collapsed": workspace.state.panel_collapsed}

    @app.post("/workspace/drop")
    async def drop(req: DropRequest):
        _check(workspace.handle_drop(req.payload, req.target), "Drop not applied")
        return workspace.get_state_snapshot()

    return app
