"""ModerationInformation: moderated bundles, their workflows and entity capabilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contentmod.core.protocols import (
    IEntityHost,
    IEntityRevision,
    IWorkflowRepository,
    SupportsPublishing,
    SupportsTranslation,
)
from contentmod.models.workflow import WorkflowDefinition
from contentmod.moderation.state_store import StateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityCapabilities:
    """Optional capabilities of an entity type."""

    translatable: bool = False
    publishable: bool = False


class ModerationInformation:
    """Answers host-facing questions about moderated entities.

    Capabilities are resolved from the first entity seen of each entity type
    and reused for every later entity of that type.
    """

    def __init__(self, workflows: IWorkflowRepository, store: StateStore, host: IEntityHost) -> None:
        self._workflows = workflows
        self._store = store
        self._host = host
        self._capabilities: dict[str, EntityCapabilities] = {}

    def capabilities(self, entity: IEntityRevision) -> EntityCapabilities:
        caps = self._capabilities.get(entity.entity_type_id)
        if caps is None:
            caps = EntityCapabilities(
                translatable=isinstance(entity, SupportsTranslation),
                publishable=isinstance(entity, SupportsPublishing),
            )
            self._capabilities[entity.entity_type_id] = caps
            logger.debug("Resolved capabilities for %s: %s", entity.entity_type_id, caps)
        return caps

    def language_for(self, entity: IEntityRevision) -> str | None:
        """Language variant to track, or None when the type is not translatable."""
        return entity.language_code if self.capabilities(entity).translatable else None

    def should_moderate_entities_of_bundle(self, entity_type_id: str, bundle: str) -> bool:
        return self._workflows.find_for_bundle(entity_type_id, bundle) is not None

    def get_workflow_for_entity(self, entity: IEntityRevision) -> WorkflowDefinition | None:
        return self._workflows.find_for_bundle(entity.entity_type_id, entity.bundle)

    def is_moderated_entity(self, entity: IEntityRevision) -> bool:
        return self.get_workflow_for_entity(entity) is not None

    def is_default_revision_published(
        self, entity: IEntityRevision, workflow: WorkflowDefinition | None = None
    ) -> bool:
        """True when any language variant of the entity's default revision is published.

        A default revision without a state row counts as being in the
        workflow's initial state for that revision.
        """
        if workflow is None:
            workflow = self.get_workflow_for_entity(entity)
        if workflow is None or entity.entity_id is None:
            return False

        default = self._host.load_default_revision(entity.entity_type_id, entity.entity_id)
        if default is None or default.revision_id is None:
            return False

        if self.capabilities(default).translatable:
            languages: list[str | None] = list(default.translation_languages())
        else:
            languages = [None]

        for language_code in languages:
            state_id = self._store.resolve_current_state_id(
                entity.entity_type_id, entity.entity_id, default.revision_id,
                workflow.id, language_code,
            )
            if state_id is None:
                state_id = workflow.get_initial_state(default).id
            if workflow.has_state(state_id) and workflow.get_state(state_id).published:
                return True
        return False
