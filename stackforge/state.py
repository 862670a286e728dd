"""Orchestrator state machine.

The generate/validate/correct loop is expressed as a pure transition function
over an immutable :class:`LoopState`. The pipeline performs the I/O for the
current stage, classifies what happened as an :class:`Outcome`, and asks
:func:`transition` for the next state. Every path reaches a terminal stage in
at most ``max_attempts`` validation rounds.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Stage(str, Enum):
    RESOLVING = "resolving"
    STRUCTURE_GENERATED = "structure_generated"
    CONTENT_GENERATED = "content_generated"
    VALIDATING = "validating"
    CORRECTING = "correcting"
    DONE_SUCCESS = "done_success"
    DONE_FAILURE = "done_failure"

    @property
    def is_terminal(self) -> bool:
        return self in (Stage.DONE_SUCCESS, Stage.DONE_FAILURE)


class Outcome(str, Enum):
    """What happened while the current stage ran."""

    PASSED = "passed"
    FAILED = "failed"
    # Failure that correction cannot repair (reference mismatch).
    IRRECOVERABLE = "irrecoverable"


class LoopState(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: Stage = Stage.RESOLVING
    attempt: int = Field(default=1, ge=1, description="Current validation round, 1-based")
    max_attempts: int = Field(default=3, ge=1)

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - self.attempt


_NEXT_STAGE = {
    Stage.RESOLVING: Stage.STRUCTURE_GENERATED,
    Stage.STRUCTURE_GENERATED: Stage.CONTENT_GENERATED,
    Stage.CONTENT_GENERATED: Stage.VALIDATING,
}


def transition(state: LoopState, outcome: Outcome) -> LoopState:
    """Return the state that follows *state* given *outcome*.

    - Before validation, PASSED advances one stage and anything else ends in
      ``DONE_FAILURE``.
    - VALIDATING: PASSED ends in ``DONE_SUCCESS``; FAILED moves to
      ``CORRECTING`` while attempts remain, else ``DONE_FAILURE``;
      IRRECOVERABLE always ends in ``DONE_FAILURE``.
    - CORRECTING: PASSED (the batch ran) returns to ``VALIDATING`` with the
      attempt counter incremented; anything else ends in ``DONE_FAILURE``.
    - Terminal states are absorbing.
    """
    stage = state.stage
    if stage.is_terminal:
        return state

    if stage in _NEXT_STAGE:
        if outcome is Outcome.PASSED:
            return state.model_copy(update={"stage": _NEXT_STAGE[stage]})
        return state.model_copy(update={"stage": Stage.DONE_FAILURE})

    if stage is Stage.VALIDATING:
        if outcome is Outcome.PASSED:
            return state.model_copy(update={"stage": Stage.DONE_SUCCESS})
        if outcome is Outcome.FAILED and state.attempt < state.max_attempts:
            return state.model_copy(update={"stage": Stage.CORRECTING})
        return state.model_copy(update={"stage": Stage.DONE_FAILURE})

    # Stage.CORRECTING
    if outcome is Outcome.PASSED:
        return state.model_copy(update={"stage": Stage.VALIDATING, "attempt": state.attempt + 1})
    return state.model_copy(update={"stage": Stage.DONE_FAILURE})
