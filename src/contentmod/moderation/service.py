"""ModerationService — entry points the host entity layer calls into."""

from __future__ import annotations

import logging

from contentmod.core.config import AppSettings
from contentmod.core.protocols import IEntityHost, IEntityRevision, IStateBackend, IWorkflowRepository
from contentmod.models.record import StateRecord
from contentmod.moderation.field import ModerationStateField
from contentmod.moderation.information import ModerationInformation
from contentmod.moderation.state_store import RevisionMode, StateStore, target_revision_id
from contentmod.moderation.transition import TransitionController
from contentmod.persistence import create_persistence

logger = logging.getLogger(__name__)


class ModerationService:
    """Computes, reacts to and records moderation states of host entities.

    The host calls :meth:`compute_current_state` when a moderated entity's
    state is read, :meth:`on_field_changed` when it is assigned, and
    :meth:`record_state` from inside its own save transaction.
    """

    def __init__(
        self,
        *,
        information: ModerationInformation,
        store: StateStore,
        transitions: TransitionController,
    ) -> None:
        self._information = information
        self._store = store
        self._transitions = transitions

    @property
    def information(self) -> ModerationInformation:
        return self._information

    @property
    def store(self) -> StateStore:
        return self._store

    def compute_current_state(
        self, entity: IEntityRevision, mode: RevisionMode = RevisionMode.NORMAL
    ) -> str | None:
        """Stored state of the target revision, else the workflow's initial state.

        None when the entity's bundle is not moderated.
        """
        workflow = self._information.get_workflow_for_entity(entity)
        if workflow is None:
            return None

        revision_id = target_revision_id(entity, mode)
        if not entity.is_new and entity.entity_id is not None and revision_id is not None:
            state_id = self._store.resolve_current_state_id(
                entity.entity_type_id,
                entity.entity_id,
                revision_id,
                workflow.id,
                self._information.language_for(entity),
            )
            if state_id is not None:
                return state_id

        # New entities and placeholder entities of a bundle being defined
        return workflow.get_initial_state(entity).id

    def on_field_changed(self, entity: IEntityRevision, new_state_id: str) -> bool:
        workflow = self._information.get_workflow_for_entity(entity)
        if workflow is None:
            logger.debug("%s/%s is not moderated, ignoring state change", entity.entity_type_id, entity.bundle)
            return False
        return self._transitions.on_state_assigned(entity, workflow, new_state_id)

    def record_state(self, entity: IEntityRevision, state_id: str) -> StateRecord | None:
        """Commit ``state_id`` for the entity's saved revision.

        Unknown state ids raise StateNotFoundError; None is returned for
        entities that are not moderated.
        """
        workflow = self._information.get_workflow_for_entity(entity)
        if workflow is None:
            return None
        return self._transitions.commit(entity, workflow, state_id)

    def field(
        self, entity: IEntityRevision, mode: RevisionMode = RevisionMode.NORMAL
    ) -> ModerationStateField:
        return ModerationStateField(entity, self, mode)


def build_service(
    workflows: IWorkflowRepository, backend: IStateBackend, host: IEntityHost
) -> ModerationService:
    """Wire a ModerationService from its collaborators."""
    store = StateStore(backend)
    information = ModerationInformation(workflows, store, host)
    return ModerationService(
        information=information,
        store=store,
        transitions=TransitionController(information, store),
    )


def create_service(host: IEntityHost, settings: AppSettings | None = None) -> ModerationService:
    """Create a ModerationService with backends chosen by application settings."""
    state_backend, workflows, _cache = create_persistence(settings)
    return build_service(workflows, state_backend, host)
