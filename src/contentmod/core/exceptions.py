"""contentmod exception hierarchy."""

from __future__ import annotations


class ContentModError(Exception):
    """Base exception for all contentmod errors."""


class NotFoundError(ContentModError):
    """A required workflow or state does not exist."""


class WorkflowNotFoundError(NotFoundError):
    """No workflow definition with the given id."""

    def __init__(self, workflow_id: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(f"Workflow {workflow_id!r} does not exist")


class StateNotFoundError(NotFoundError):
    """Workflow has no state with the given id."""

    def __init__(self, workflow_id: str, state_id: str) -> None:
        self.workflow_id = workflow_id
        self.state_id = state_id
        super().__init__(f"Workflow {workflow_id!r} has no state {state_id!r}")


class InvalidIndexError(ContentModError, IndexError):
    """Moderation field accessed at a slot other than 0."""

    def __init__(self, index: object) -> None:
        self.index = index
        super().__init__(
            f"An entity can not have multiple moderation states at the same time (index={index!r})"
        )


class StateStoreError(ContentModError):
    """State record backend operation failed."""


class CacheError(ContentModError):
    """Redis cache operation failed."""
