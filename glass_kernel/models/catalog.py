"""Scenario Catalog entries: the immutable scripts a conversation is played from."""

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Persona(str, Enum):
    DEVELOPER = "developer"
    RESEARCHER = "researcher"
    BUSINESS = "business"
    UNIVERSAL = "universal"   # Neutral default when a scenario declares none


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class StepStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class CatalogModel(BaseModel):
    """Base for catalog records. Accepts camelCase keys from scenario files."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlanStep(CatalogModel):
    """A single checklist item in a plan."""

    id: str
    label: str = Field(validation_alias=AliasChoices("label", "title"))
    status: StepStatus = StepStatus.PENDING
    required: bool = False


class PlanDefinition(CatalogModel):
    title: str
    steps: List[PlanStep] = []


class MemorySeed(CatalogModel):
    """A memory item a scenario starts with."""

    id: str
    key: str
    value: str
    tags: List[str] = []


class ScriptedResponse(CatalogModel):
    """The assistant reply revealed after the thinking period."""

    text: str
    thoughts: List[str] = []
    confidence: ConfidenceLevel = ConfidenceLevel.HIGH
    switch_persona: Optional[Persona] = None   # Applied once the reply lands


class ScenarioCatalogEntry(CatalogModel):
    """One scripted scenario. Identity is the id; the core never mutates it."""

    id: str
    title: str
    persona: Optional[str] = None             # Free text in source files
    description: str = ""
    initial_message: str
    user_message: Optional[str] = None
    plan: Optional[PlanDefinition] = None
    memory_seed: List[MemorySeed] = Field(
        default=[],
        validation_alias=AliasChoices("memory_seed", "memorySeed", "memoryContext"),
    )
    scripted_response: Optional[ScriptedResponse] = Field(
        default=None,
        validation_alias=AliasChoices(
            "scripted_response", "scriptedResponse", "aiResponse"
        ),
    )

    def resolved_persona(self, default: Persona = Persona.UNIVERSAL) -> Persona:
        """The declared persona, or the default when absent or unrecognized."""
        try:
            return Persona(self.persona) if self.persona else default
        except ValueError:
            return default
