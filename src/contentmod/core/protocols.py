"""Protocol interfaces for all contentmod abstractions.

The core never imports host classes: entity revisions, the entity storage
layer and the record backends are all described here structurally, so hosts
satisfy them without inheriting anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contentmod.models.record import StateRecord
    from contentmod.models.workflow import WorkflowDefinition


# ---------------------------------------------------------------------------
# Host entity revisions
# ---------------------------------------------------------------------------

@runtime_checkable
class IEntityRevision(Protocol):
    """Read-mostly snapshot of one entity revision exposed by the host."""

    entity_type_id: str
    entity_id: str | None
    bundle: str
    revision_id: int | None
    loaded_revision_id: int | None
    language_code: str

    @property
    def is_new(self) -> bool: ...

    @property
    def is_new_revision(self) -> bool: ...

    @property
    def is_new_translation(self) -> bool: ...

    @property
    def is_default_revision(self) -> bool: ...

    def set_default_revision(self, value: bool) -> None: ...


@runtime_checkable
class SupportsPublishing(Protocol):
    """Entity capability: a published flag the core may toggle."""

    def is_published(self) -> bool: ...

    def set_published(self) -> None: ...

    def set_unpublished(self) -> None: ...


@runtime_checkable
class SupportsTranslation(Protocol):
    """Entity capability: language variants of one revision."""

    def translation_languages(self) -> list[str]: ...


# ---------------------------------------------------------------------------
# Host entity storage
# ---------------------------------------------------------------------------

@runtime_checkable
class IEntityHost(Protocol):
    """Outbound calls into the host entity storage layer."""

    def load_default_revision(self, entity_type_id: str, entity_id: str) -> IEntityRevision | None: ...


# ---------------------------------------------------------------------------
# Persistence: state records
# ---------------------------------------------------------------------------

@runtime_checkable
class IStateBackend(Protocol):
    """Raw storage for moderation state history rows."""

    def query_records(
        self, entity_type_id: str, entity_id: str, workflow_id: str
    ) -> list[StateRecord]: ...

    def next_sequence(self) -> int: ...

    def save_records(self, records: list[StateRecord]) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: workflows
# ---------------------------------------------------------------------------

@runtime_checkable
class IWorkflowRepository(Protocol):
    """Workflow definition lookup."""

    def get(self, workflow_id: str) -> WorkflowDefinition: ...

    def find_for_bundle(self, entity_type_id: str, bundle: str) -> WorkflowDefinition | None: ...


# ---------------------------------------------------------------------------
# Persistence: cache backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
