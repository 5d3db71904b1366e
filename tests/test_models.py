"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from glass_kernel.models import (
    ConfidenceLevel,
    ConversationTurn,
    DragPayload,
    Folder,
    MutationResult,
    Persona,
    PlanStep,
    PlaybackConfig,
    PlaybackPhase,
    PlaybackState,
    ScenarioCatalogEntry,
    StepStatus,
    TurnRole,
    WorkspaceState,
)


class TestMutationResult:
    def test_only_applied_is_truthy(self):
        assert MutationResult.APPLIED
        assert not MutationResult.UNKNOWN_REFERENCE
        assert not MutationResult.INVALID_INPUT
        assert not MutationResult.IGNORED

    def test_values_are_strings(self):
        assert MutationResult.UNKNOWN_REFERENCE.value == "unknown_reference"


class TestScenarioCatalogEntry:
    def test_accepts_camel_case_source_keys(self):
        entry = ScenarioCatalogEntry.model_validate({
            "id": "case-1",
            "title": "Case",
            "persona": "developer",
            "initialMessage": "Hello",
            "userMessage": "Help me",
            "plan": {"title": "P", "steps": [{"id": "s1", "title": "First", "status": "in-progress"}]},
            "memoryContext": [{"id": "m1", "key": "k", "value": "v"}],
            "aiResponse": {"text": "Done.", "thoughts": ["a", "b"]},
        })
        assert entry.initial_message == "Hello"
        assert entry.user_message == "Help me"
        assert entry.plan.steps[0].label == "First"
        assert entry.plan.steps[0].status == StepStatus.IN_PROGRESS
        assert entry.memory_seed[0].key == "k"
        assert entry.scripted_response.thoughts == ["a", "b"]
        assert entry.scripted_response.confidence == ConfidenceLevel.HIGH

    def test_accepts_field_names(self):
        entry = ScenarioCatalogEntry(id="x", title="X", initial_message="Hi")
        assert entry.user_message is None
        assert entry.plan is None
        assert entry.memory_seed == []
        assert entry.scripted_response is None

    def test_initial_message_required(self):
        with pytest.raises(ValidationError):
            ScenarioCatalogEntry.model_validate({"id": "x", "title": "X"})

    def test_resolved_persona(self):
        assert ScenarioCatalogEntry(
            id="x", title="X", initial_message="Hi", persona="business"
        ).resolved_persona() == Persona.BUSINESS
        assert ScenarioCatalogEntry(
            id="x", title="X", initial_message="Hi"
        ).resolved_persona() == Persona.UNIVERSAL
        assert ScenarioCatalogEntry(
            id="x", title="X", initial_message="Hi", persona="pirate"
        ).resolved_persona() == Persona.UNIVERSAL


class TestPlanStep:
    def test_label_or_title(self):
        assert PlanStep.model_validate({"id": "a", "label": "L"}).label == "L"
        assert PlanStep.model_validate({"id": "a", "title": "T"}).label == "T"

    def test_defaults_to_pending(self):
        assert PlanStep(id="a", label="L").status == StepStatus.PENDING

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            PlanStep.model_validate({"id": "a", "label": "L", "status": "blocked"})


class TestPlaybackState:
    def test_initial_state(self):
        state = PlaybackState()
        assert state.current_scenario_id is None
        assert state.persona == Persona.UNIVERSAL
        assert state.conversation == []
        assert state.thinking is False
        assert state.confidence_visible is False
        assert state.phase == PlaybackPhase.IDLE

    def test_turn_serialises_role_and_persona(self):
        from datetime import datetime, timezone

        turn = ConversationTurn(
            id="t1",
            role=TurnRole.ASSISTANT,
            text="Hi",
            created_at=datetime.now(timezone.utc),
            persona=Persona.DEVELOPER,
        )
        dumped = turn.model_dump(mode="json")
        assert dumped["role"] == "assistant"
        assert dumped["persona"] == "developer"


class TestWorkspaceModels:
    def test_get_folder(self):
        state = WorkspaceState(folders=[Folder(id="f1", name="One")])
        assert state.get_folder("f1").name == "One"
        assert state.get_folder("f2") is None

    def test_drag_payload_kind_validated(self):
        with pytest.raises(ValidationError):
            DragPayload(kind="memory", id="m1")


class TestPlaybackConfig:
    def test_defaults(self):
        config = PlaybackConfig()
        assert config.thought_delay_seconds == 1.0
        assert config.response_delay_seconds == 2.5
        assert config.reply_delay_min_seconds == 1.5
        assert config.reply_delay_max_seconds == 2.5

    def test_reply_window_must_be_ordered(self):
        with pytest.raises(ValidationError):
            PlaybackConfig(reply_delay_min_seconds=3.0, reply_delay_max_seconds=1.0)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            PlaybackConfig(thought_delay_seconds=-1)
