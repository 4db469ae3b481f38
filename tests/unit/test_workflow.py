"""Tests for workflow, state and transition definitions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from contentmod.core.exceptions import NotFoundError, StateNotFoundError
from contentmod.models.entity import EntityRevision, PublishableEntityRevision
from contentmod.models.workflow import StateDefinition, TransitionDefinition, WorkflowDefinition
from contentmod.persistence.seed_loader import load_workflows
from tests.fakes import editorial_workflow

SEED = "config/workflows_seed.json"


class TestStates:
    def test_has_state(self):
        workflow = editorial_workflow()
        assert workflow.has_state("draft")
        assert not workflow.has_state("needs_review")
        assert not workflow.has_state(None)

    def test_get_state_flags(self):
        published = editorial_workflow().get_state("published")
        assert published.published is True
        assert published.default_revision is True

    def test_get_unknown_state_raises_not_found(self):
        with pytest.raises(NotFoundError) as excinfo:
            editorial_workflow().get_state("ghost")
        assert isinstance(excinfo.value, StateNotFoundError)
        assert excinfo.value.state_id == "ghost"

    def test_definitions_are_immutable(self):
        workflow = editorial_workflow()
        with pytest.raises(ValidationError):
            workflow.id = "other"

    def test_duplicate_state_ids_rejected(self):
        with pytest.raises(ValidationError, match="twice"):
            WorkflowDefinition(
                id="w",
                states=(StateDefinition(id="draft"), StateDefinition(id="published"), StateDefinition(id="draft")),
            )

    def test_transition_to_unknown_state_rejected(self):
        with pytest.raises(ValidationError, match="gone"):
            WorkflowDefinition(
                id="w",
                states=(StateDefinition(id="draft"), StateDefinition(id="published")),
                transitions=(TransitionDefinition(id="t", from_states=("draft",), to_state="gone"),),
            )

    def test_missing_draft_state_rejected(self):
        with pytest.raises(ValidationError, match="'draft' state"):
            WorkflowDefinition(
                id="review",
                default_moderation_state="published",
                states=(StateDefinition(id="published", published=True),),
            )

    def test_missing_published_state_rejected(self):
        with pytest.raises(ValidationError, match="'published' state"):
            WorkflowDefinition(
                id="review",
                default_moderation_state="todo",
                states=(StateDefinition(id="todo"), StateDefinition(id="draft")),
            )

    def test_undeclared_default_state_rejected(self):
        with pytest.raises(ValidationError, match="'nope'"):
            WorkflowDefinition(
                id="w",
                default_moderation_state="nope",
                states=(StateDefinition(id="draft"), StateDefinition(id="published")),
            )

    def test_custom_default_state_is_accepted(self):
        workflow = WorkflowDefinition(
            id="review",
            default_moderation_state="todo",
            states=(StateDefinition(id="todo"), StateDefinition(id="draft"), StateDefinition(id="published")),
        )
        assert workflow.get_initial_state().id == "todo"


class TestInitialState:
    def test_new_entity_gets_default_state(self):
        entity = PublishableEntityRevision(entity_type_id="node", bundle="article", published=True)
        assert editorial_workflow().get_initial_state(entity).id == "draft"

    def test_without_context(self):
        assert editorial_workflow().get_initial_state().id == "draft"

    def test_existing_published_entity_starts_published(self):
        entity = PublishableEntityRevision(
            entity_type_id="node", bundle="article", entity_id="1", revision_id=1, published=True,
        )
        assert editorial_workflow().get_initial_state(entity).id == "published"

    def test_existing_unpublished_entity_starts_draft(self):
        entity = PublishableEntityRevision(
            entity_type_id="node", bundle="article", entity_id="1", revision_id=1,
        )
        assert editorial_workflow().get_initial_state(entity).id == "draft"

    def test_non_publishable_entity_uses_configured_default(self):
        workflow = editorial_workflow().model_copy(update={"default_moderation_state": "archived"})
        entity = EntityRevision(entity_type_id="node", bundle="article", entity_id="1", revision_id=1)
        assert workflow.get_initial_state(entity).id == "archived"


class TestTransitions:
    def test_transitions_from_state(self):
        ids = {t.id for t in editorial_workflow().get_transitions_from("published")}
        assert ids == {"create_new_draft", "publish", "archive"}

    def test_has_transition_between(self):
        workflow = editorial_workflow()
        assert workflow.has_transition_between("draft", "published")
        assert not workflow.has_transition_between("draft", "archived")


class TestBundles:
    def test_applies_to_bound_bundle(self):
        workflow = editorial_workflow()
        assert workflow.applies_to("node", "article")
        assert not workflow.applies_to("node", "page")
        assert not workflow.applies_to("media", "article")


class TestSeedLoader:
    def test_loads_editorial_from_seed(self, request):
        path = request.config.rootpath / SEED
        workflows = load_workflows(path)
        assert [w.id for w in workflows] == ["editorial"]
        assert workflows[0].applies_to("node", "page")
        assert workflows[0].get_state("archived").default_revision is True
