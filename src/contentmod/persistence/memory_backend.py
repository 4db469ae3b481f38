"""In-memory backends for unit tests — dict-backed fakes."""

from __future__ import annotations

from contentmod.core.exceptions import WorkflowNotFoundError
from contentmod.core.protocols import IEntityRevision
from contentmod.models.record import StateRecord
from contentmod.models.workflow import WorkflowDefinition


class MemoryStateBackend:
    """Dict-backed IStateBackend for unit tests and single-process hosts."""

    def __init__(self) -> None:
        self._rows: dict[str, list[StateRecord]] = {}
        self._sequence = 0

    def query_records(self, entity_type_id: str, entity_id: str, workflow_id: str) -> list[StateRecord]:
        rows = self._rows.get(f"{entity_type_id}#{entity_id}#{workflow_id}", [])
        return [row.model_copy(deep=True) for row in rows]

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def save_records(self, records: list[StateRecord]) -> None:
        for record in records:
            self._rows.setdefault(record.key.partition, []).append(record.model_copy(deep=True))

    def count(self) -> int:
        return sum(len(rows) for rows in self._rows.values())


class MemoryWorkflowRepository:
    """Dict-backed IWorkflowRepository."""

    def __init__(self, workflows: list[WorkflowDefinition] | None = None) -> None:
        self._workflows: dict[str, WorkflowDefinition] = {}
        for workflow in workflows or []:
            self.add(workflow)

    def add(self, workflow: WorkflowDefinition) -> None:
        self._workflows[workflow.id] = workflow

    def get(self, workflow_id: str) -> WorkflowDefinition:
        try:
            return self._workflows[workflow_id]
        except KeyError:
            raise WorkflowNotFoundError(workflow_id) from None

    def find_for_bundle(self, entity_type_id: str, bundle: str) -> WorkflowDefinition | None:
        for workflow in self._workflows.values():
            if workflow.applies_to(entity_type_id, bundle):
                return workflow
        return None


class MemoryEntityHost:
    """Dict-backed IEntityHost holding the default revision of each entity."""

    def __init__(self) -> None:
        self._defaults: dict[str, IEntityRevision] = {}

    def set_default_revision(self, entity: IEntityRevision) -> None:
        self._defaults[f"{entity.entity_type_id}#{entity.entity_id}"] = entity

    def load_default_revision(self, entity_type_id: str, entity_id: str) -> IEntityRevision | None:
        return self._defaults.get(f"{entity_type_id}#{entity_id}")


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
