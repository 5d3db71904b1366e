"""Mutation results: the outcome of every state-changing operation."""

from enum import Enum


class MutationResult(str, Enum):
    """
    No mutator raises on misuse. Each returns one of these instead, and only
    APPLIED is truthy, so callers can write `if not tree.rename_folder(...)`.
    """
    APPLIED = "applied"
    UNKNOWN_REFERENCE = "unknown_reference"   # Scenario, folder, step or memory id not found
    INVALID_INPUT = "invalid_input"           # Blank text / name, unknown persona
    IGNORED = "ignored"                       # Well-formed, but refused in the current state

    def __bool__(self) -> bool:
        return self is MutationResult.APPLIED
