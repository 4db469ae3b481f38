"""Shared test doubles — re-export memory backends plus workflow builders."""

from __future__ import annotations

from contentmod.models.workflow import StateDefinition, TransitionDefinition, WorkflowDefinition
from contentmod.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryEntityHost,
    MemoryStateBackend,
    MemoryWorkflowRepository,
)

__all__ = [
    "MemoryCacheBackend",
    "MemoryEntityHost",
    "MemoryStateBackend",
    "MemoryWorkflowRepository",
    "editorial_workflow",
]


def editorial_workflow(bundles: dict[str, tuple[str, ...]] | None = None) -> WorkflowDefinition:
    """The stock draft/published/archived workflow bound to node articles."""
    return WorkflowDefinition(
        id="editorial",
        label="Editorial",
        states=(
            StateDefinition(id="draft", label="Draft"),
            StateDefinition(id="published", label="Published", published=True, default_revision=True),
            StateDefinition(id="archived", label="Archived", default_revision=True),
        ),
        transitions=(
            TransitionDefinition(id="create_new_draft", from_states=("draft", "published"), to_state="draft"),
            TransitionDefinition(id="publish", from_states=("draft", "published"), to_state="published"),
            TransitionDefinition(id="archive", from_states=("published",), to_state="archived"),
        ),
        bundles=bundles if bundles is not None else {"node": ("article",)},
    )
