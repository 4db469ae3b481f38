"""TransitionController — derives revision flags from an assigned moderation state."""

from __future__ import annotations

import logging

from contentmod.core.exceptions import StateStoreError
from contentmod.core.protocols import IEntityRevision, SupportsPublishing
from contentmod.models.record import StateRecord, TrackedEntityKey
from contentmod.models.workflow import WorkflowDefinition
from contentmod.moderation.information import ModerationInformation
from contentmod.moderation.state_store import StateStore

logger = logging.getLogger(__name__)


class TransitionController:
    """Applies a workflow state's flags to an entity revision and records it."""

    def __init__(self, information: ModerationInformation, store: StateStore) -> None:
        self._information = information
        self._store = store

    def on_state_assigned(
        self, entity: IEntityRevision, workflow: WorkflowDefinition, new_state_id: str
    ) -> bool:
        """Update the default-revision and published flags for ``new_state_id``.

        Returns False without touching the entity when the workflow does not
        know the state.
        """
        if not workflow.has_state(new_state_id):
            logger.warning(
                "State %r is not part of workflow %s, leaving %s/%s flags untouched",
                new_state_id, workflow.id, entity.entity_type_id, entity.entity_id,
            )
            return False

        state = workflow.get_state(new_state_id)

        # Default if new, a new translation, a default revision state, or the
        # current default revision is not published.
        update_default = (
            entity.is_new
            or entity.is_new_translation
            or state.default_revision
            or not self._information.is_default_revision_published(entity, workflow)
        )
        entity.set_default_revision(update_default)

        if self._information.capabilities(entity).publishable and isinstance(entity, SupportsPublishing):
            if entity.is_published() != state.published:
                if state.published:
                    entity.set_published()
                else:
                    entity.set_unpublished()

        logger.info(
            "Assigned %r to %s/%s: default_revision=%s published=%s",
            new_state_id, entity.entity_type_id, entity.entity_id, update_default, state.published,
        )
        return True

    def commit(self, entity: IEntityRevision, workflow: WorkflowDefinition, state_id: str) -> StateRecord:
        """Record ``state_id`` for the entity's current revision.

        Language variants of the entity's newest row are carried over to the
        new revision's row.
        """
        workflow.get_state(state_id)
        if entity.entity_id is None or entity.revision_id is None:
            raise StateStoreError(
                f"Cannot record state for unsaved {entity.entity_type_id} revision"
            )

        key = TrackedEntityKey(
            entity_type_id=entity.entity_type_id,
            entity_id=entity.entity_id,
            revision_id=entity.revision_id,
            workflow_id=workflow.id,
        )
        language_code = self._information.language_for(entity)

        base = self._store.resolve_current_record(
            key.entity_type_id, key.entity_id, key.revision_id, key.workflow_id
        )
        if base is None:
            base = self._store.latest_record(key.entity_type_id, key.entity_id, key.workflow_id)

        if base is None:
            record = StateRecord(key=key, state_id=state_id, language_code=language_code)
        else:
            record = base.model_copy(update={"key": key}, deep=True).with_state(language_code, state_id)
        return self._store.commit(record)
