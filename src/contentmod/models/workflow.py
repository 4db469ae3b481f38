"""Workflow, state and transition definitions.

A workflow is loaded once (from the seed file, DynamoDB or code) and shared
read-only by every tracker that references it, so all models here are frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from contentmod.core.exceptions import StateNotFoundError
from contentmod.core.protocols import SupportsPublishing

DRAFT = "draft"
PUBLISHED = "published"


class StateDefinition(BaseModel):
    """A single moderation state and the flags it drives."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    published: bool = False
    default_revision: bool = False


class TransitionDefinition(BaseModel):
    """An allowed move from any of ``from_states`` into ``to_state``."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    from_states: tuple[str, ...] = ()
    to_state: str


class WorkflowDefinition(BaseModel):
    """Immutable description of a content moderation workflow."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    states: tuple[StateDefinition, ...] = ()
    transitions: tuple[TransitionDefinition, ...] = ()
    default_moderation_state: str = DRAFT
    # entity type id -> bundles moderated by this workflow
    bundles: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> WorkflowDefinition:
        known = {s.id for s in self.states}
        if len(known) != len(self.states):
            raise ValueError(f"Workflow {self.id!r} declares a state id twice")
        for required in (DRAFT, PUBLISHED):
            if required not in known:
                raise ValueError(f"Workflow {self.id!r} must declare a {required!r} state")
        if self.default_moderation_state not in known:
            raise ValueError(
                f"Default state {self.default_moderation_state!r} of workflow {self.id!r} is not declared"
            )
        for transition in self.transitions:
            for state_id in (*transition.from_states, transition.to_state):
                if state_id not in known:
                    raise ValueError(
                        f"Transition {transition.id!r} references unknown state {state_id!r}"
                    )
        return self

    # ---- states ----

    def has_state(self, state_id: str | None) -> bool:
        return any(s.id == state_id for s in self.states)

    def get_state(self, state_id: str) -> StateDefinition:
        for state in self.states:
            if state.id == state_id:
                return state
        raise StateNotFoundError(self.id, state_id)

    def get_initial_state(self, context: Any = None) -> StateDefinition:
        """State a revision starts in before any record exists for it.

        An existing entity that can be published starts in ``published`` or
        ``draft`` depending on its current flag; everything else starts in the
        configured default state.
        """
        if isinstance(context, SupportsPublishing) and not getattr(context, "is_new", True):
            return self.get_state(PUBLISHED if context.is_published() else DRAFT)
        return self.get_state(self.default_moderation_state)

    # ---- transitions ----

    def get_transitions_from(self, state_id: str) -> list[TransitionDefinition]:
        return [t for t in self.transitions if state_id in t.from_states]

    def has_transition_between(self, from_state: str, to_state: str) -> bool:
        return any(t.to_state == to_state for t in self.get_transitions_from(from_state))

    # ---- bundles ----

    def applies_to(self, entity_type_id: str, bundle: str) -> bool:
        return bundle in self.bundles.get(entity_type_id, ())
