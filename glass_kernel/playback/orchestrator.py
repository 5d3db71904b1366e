"""
Playback Orchestrator: drives the staged reveal of a conversation.

A scenario load resets the conversation and, if the scenario scripts a
reply, schedules two deferred stages:

  +thought_delay   → the full thought trace appears
  +response_delay  → the assistant turn lands, thinking ends, confidence shows

A user message appends immediately and schedules one mocked reply.

Cancellation:
  A load or send schedules its first stage before touching state. Every
  load / send starts a new generation. Pending handles from the
  previous generation are cancelled, and every deferred task re-checks its
  generation before touching state, so a stale task can never apply.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union
from uuid import uuid4

from pydantic import ValidationError

from glass_kernel.catalog.store import ScenarioCatalog
from glass_kernel.events.publisher import StatePublisher
from glass_kernel.models.catalog import (
    ConfidenceLevel,
    Persona,
    PlanDefinition,
    PlanStep,
    ScriptedResponse,
    StepStatus,
)
from glass_kernel.models.config import PlaybackConfig
from glass_kernel.models.playback import (
    ConversationTurn,
    MemoryItem,
    Plan,
    PlaybackPhase,
    PlaybackState,
    TurnRole,
)
from glass_kernel.models.results import MutationResult
from glass_kernel.playback.responses import ResponsePool
from glass_kernel.playback.scheduler import AsyncioScheduler, DeferredScheduler, TaskHandle

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _copy_plan(definition: Optional[PlanDefinition]) -> Optional[Plan]:
    if definition is None:
        return None
    return Plan(
        title=definition.title,
        steps=[step.model_copy(deep=True) for step in definition.steps],
    )


class PlaybackOrchestrator:
    """
    Owns the live PlaybackState. Every mutator below is the only path by
    which that state changes; subscribers are notified after each change.

    The default AsyncioScheduler needs a running event loop. Without one a
    load or send is refused as IGNORED and the state is left as it was.
    """

    def __init__(
        self,
        catalog: ScenarioCatalog,
        scheduler: Optional[DeferredScheduler] = None,
        config: Optional[PlaybackConfig] = None,
        responses: Optional[ResponsePool] = None,
    ):
        self.catalog = catalog
        self.scheduler = scheduler or AsyncioScheduler()
        self.config = config or PlaybackConfig()
        self.responses = responses or ResponsePool()

        self._state = PlaybackState(persona=self.config.default_persona)
        self._pending: List[TaskHandle] = []
        self._publisher: StatePublisher[PlaybackState] = StatePublisher()

    # --- Read model ---

    @property
    def state(self) -> PlaybackState:
        """The live state. Treat as read-only; use the mutators."""
        return self._state

    @property
    def phase(self) -> PlaybackPhase:
        return self._state.phase

    def subscribe(self, listener: Callable[[PlaybackState], None]) -> Callable[[], None]:
        return self._publisher.subscribe(listener)

    def get_state_snapshot(self) -> dict:
        """Get a serializable snapshot of the current playback state."""
        return self._state.model_dump(mode="json")

    # --- Scenario playback ---

    def load_scenario(self, scenario_id: str) -> MutationResult:
        """
        Reset the conversation to a scenario and start its reveal.
        Unknown ids leave the current display untouched.
        """
        entry = self.catalog.lookup(scenario_id)
        if entry is None:
            logger.warning("Ignoring load of unknown scenario %s", scenario_id)
            return MutationResult.UNKNOWN_REFERENCE

        generation = self._state.generation + 1
        handles = []
        response = entry.scripted_response
        if response is not None:
            script = response.model_copy(deep=True)
            try:
                handles.append(self._schedule(
                    self.config.thought_delay_seconds,
                    generation,
                    lambda: self._reveal_thoughts(generation, script),
                ))
            except RuntimeError:
                logger.exception("Could not schedule reveal for scenario %s", entry.id)
                return MutationResult.IGNORED
        self._replace_pending(handles)

        persona = entry.resolved_persona(self.config.default_persona)
        conversation = [
            self._make_turn(TurnRole.ASSISTANT, entry.initial_message, persona),
        ]
        if entry.user_message:
            conversation.append(self._make_turn(TurnRole.USER, entry.user_message))

        self._state = PlaybackState(
            current_scenario_id=entry.id,
            persona=persona,
            conversation=conversation,
            thinking=response is not None,
            thoughts=[],
            plan=_copy_plan(entry.plan),
            memories=[MemoryItem(**seed.model_dump()) for seed in entry.memory_seed],
            confidence_visible=False,
            phase=PlaybackPhase.THINKING if response is not None else PlaybackPhase.IDLE,
            generation=generation,
        )
        logger.info("Loaded scenario %s (generation %d)", entry.id, generation)
        self._publish()
        return MutationResult.APPLIED

    def send_message(self, text: str) -> MutationResult:
        """Append a user turn and schedule one mocked assistant reply."""
        if not text or not text.strip():
            return MutationResult.INVALID_INPUT
        if self._state.thinking:
            logger.debug("Ignoring message while a reply is pending")
            return MutationResult.IGNORED

        generation = self._state.generation + 1
        delay = self.responses.delay(
            self.config.reply_delay_min_seconds,
            self.config.reply_delay_max_seconds,
        )
        try:
            handle = self._schedule(
                delay,
                generation,
                lambda: self._land_response(self.responses.choose(), ConfidenceLevel.HIGH),
            )
        except RuntimeError:
            logger.exception("Could not schedule reply")
            return MutationResult.IGNORED
        self._replace_pending([handle])

        state = self._state
        state.generation = generation
        state.conversation.append(self._make_turn(TurnRole.USER, text))
        state.phase = PlaybackPhase.USER_TURN_PENDING
        self._publish()

        state.thoughts = []
        state.confidence_visible = False
        state.confidence_level = None
        state.thinking = True
        state.phase = PlaybackPhase.THINKING
        self._publish()
        return MutationResult.APPLIED

    def set_persona(self, persona: Union[Persona, str]) -> MutationResult:
        """
        Switch the active persona. An in-flight reveal keeps running and its
        reply is attributed to whichever persona is active when it lands.
        """
        try:
            self._state.persona = Persona(persona)
        except ValueError:
            return MutationResult.INVALID_INPUT
        self._publish()
        return MutationResult.APPLIED

    def shutdown(self) -> None:
        """Cancel every outstanding deferred task."""
        self._replace_pending([])
        self._state.generation += 1

    # --- Plan ---

    def update_plan(self, steps: Sequence[Union[PlanStep, dict]]) -> MutationResult:
        """Replace the plan's steps. No-op when there is no plan."""
        plan = self._state.plan
        if plan is None:
            return MutationResult.IGNORED
        try:
            new_steps = [
                s.model_copy(deep=True) if isinstance(s, PlanStep) else PlanStep.model_validate(s)
                for s in steps
            ]
        except ValidationError:
            logger.warning("Rejected plan update with malformed steps")
            return MutationResult.INVALID_INPUT
        plan.steps = new_steps
        self._publish()
        return MutationResult.APPLIED

    def add_plan_step(self, label: str) -> MutationResult:
        if not label or not label.strip():
            return MutationResult.INVALID_INPUT
        if self._state.plan is None:
            return MutationResult.IGNORED
        step = PlanStep(id=f"step_{uuid4().hex[:12]}", label=label)
        return self.update_plan([*self._state.plan.steps, step])

    def remove_plan_step(self, step_id: str) -> MutationResult:
        plan = self._state.plan
        if plan is None:
            return MutationResult.IGNORED
        remaining = [s for s in plan.steps if s.id != step_id]
        if len(remaining) == len(plan.steps):
            return MutationResult.UNKNOWN_REFERENCE
        return self.update_plan(remaining)

    def set_plan_step_status(
        self, step_id: str, status: Union[StepStatus, str]
    ) -> MutationResult:
        plan = self._state.plan
        if plan is None:
            return MutationResult.IGNORED
        try:
            status = StepStatus(status)
        except ValueError:
            return MutationResult.INVALID_INPUT
        if not any(s.id == step_id for s in plan.steps):
            return MutationResult.UNKNOWN_REFERENCE
        return self.update_plan([
            s.model_copy(update={"status": status}) if s.id == step_id else s
            for s in plan.steps
        ])

    # --- Memories ---

    def create_memory(self, value: str, tags: Optional[List[str]] = None) -> MemoryItem:
        item = MemoryItem(
            id=f"mem_{uuid4().hex[:12]}",
            key=self.config.default_memory_key,
            value=value,
            tags=list(tags or []),
        )
        self._state.memories.append(item)
        self._publish()
        return item

    def update_memory(self, memory_id: str, value: str) -> MutationResult:
        for item in self._state.memories:
            if item.id == memory_id:
                item.value = value
                self._publish()
                return MutationResult.APPLIED
        return MutationResult.UNKNOWN_REFERENCE

    def delete_memory(self, memory_id: str) -> MutationResult:
        remaining = [m for m in self._state.memories if m.id != memory_id]
        if len(remaining) == len(self._state.memories):
            return MutationResult.UNKNOWN_REFERENCE
        self._state.memories = remaining
        self._publish()
        return MutationResult.APPLIED

    # --- Deferred stages ---

    def _reveal_thoughts(self, generation: int, script: ScriptedResponse) -> None:
        """Stage one: the whole thought trace arrives at once."""
        self._state.thoughts = list(script.thoughts)
        self._state.phase = PlaybackPhase.REVEALING_THOUGHTS
        self._pending.append(self._schedule(
            self.config.response_delay_seconds,
            generation,
            lambda: self._land_response(
                script.text, script.confidence, script.switch_persona
            ),
        ))

    def _land_response(
        self,
        text: str,
        confidence: ConfidenceLevel,
        switch_persona: Optional[Persona] = None,
    ) -> None:
        """Final stage: append the reply under the persona active right now."""
        state = self._state
        state.conversation.append(
            self._make_turn(TurnRole.ASSISTANT, text, state.persona)
        )
        state.phase = PlaybackPhase.RESPONDING
        self._publish()

        state.thinking = False
        state.confidence_visible = True
        state.confidence_level = confidence
        if switch_persona is not None:
            state.persona = switch_persona
        state.phase = PlaybackPhase.DONE

    def _schedule(self, delay: float, generation: int, action: Callable[[], None]) -> TaskHandle:
        def run() -> None:
            if generation != self._state.generation:
                logger.debug("Dropping stale task from generation %d", generation)
                return
            action()
            self._publish()

        logger.debug("Scheduling stage in %.2fs (generation %d)", delay, generation)
        return self.scheduler.call_later(delay, run)

    def _replace_pending(self, handles: List[TaskHandle]) -> None:
        """Cancel everything in flight and track only the given handles."""
        for handle in self._pending:
            handle.cancel()
        self._pending = handles

    def _make_turn(
        self, role: TurnRole, text: str, persona: Optional[Persona] = None
    ) -> ConversationTurn:
        return ConversationTurn(
            id=f"turn_{uuid4().hex[:12]}",
            role=role,
            text=text,
            created_at=_now(),
            persona=persona if role == TurnRole.ASSISTANT else None,
        )

    def _publish(self) -> None:
        self._publisher.publish(self._state)
