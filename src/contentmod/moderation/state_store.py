"""StateStore — revision-aware lookups and commits of moderation state rows."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import StrEnum
from typing import Iterator

from contentmod.core.protocols import IEntityRevision, IStateBackend
from contentmod.models.record import StateRecord, TrackedEntityKey

logger = logging.getLogger(__name__)


class RevisionMode(StrEnum):
    """How the caller wants the target revision of a lookup chosen."""

    NORMAL = "NORMAL"
    REVERTING = "REVERTING"


def target_revision_id(entity: IEntityRevision, mode: RevisionMode = RevisionMode.NORMAL) -> int | None:
    """Revision whose state should be read: the loaded one while reverting."""
    if mode is RevisionMode.REVERTING:
        return entity.loaded_revision_id
    return entity.revision_id


class StateStore:
    """Maps tracked revisions to their moderation state rows.

    Every changed commit appends a history row with a fresh sequence number;
    lookups pick the highest sequence among the rows of the target revision.
    Inside :meth:`transaction` commits are buffered and only reach the
    backend when the block exits without an exception.
    """

    def __init__(self, backend: IStateBackend) -> None:
        self._backend = backend
        self._pending: list[StateRecord] | None = None

    def _rows(self, entity_type_id: str, entity_id: str, workflow_id: str) -> list[StateRecord]:
        rows = self._backend.query_records(entity_type_id, entity_id, workflow_id)
        if self._pending:
            partition = f"{entity_type_id}#{entity_id}#{workflow_id}"
            rows.extend(r.model_copy(deep=True) for r in self._pending if r.key.partition == partition)
        return sorted(rows, key=lambda r: r.sequence, reverse=True)

    # ---- lookups ----

    def resolve_current_record(
        self,
        entity_type_id: str,
        entity_id: str,
        revision_id: int,
        workflow_id: str,
        language_code: str | None = None,
    ) -> StateRecord | None:
        """Newest row for the target revision, or None when it was never moderated.

        When ``language_code`` is given and the row has no variant for it, one
        is branched off the row's own state on the returned copy.
        """
        for record in self._rows(entity_type_id, entity_id, workflow_id):
            if record.key.revision_id != revision_id:
                continue
            if language_code is not None and not record.has_translation(language_code):
                record.add_translation(language_code)
            return record
        logger.debug(
            "No state row for %s/%s revision %s in workflow %s",
            entity_type_id, entity_id, revision_id, workflow_id,
        )
        return None

    def resolve_current_state_id(
        self,
        entity_type_id: str,
        entity_id: str,
        revision_id: int,
        workflow_id: str,
        language_code: str | None = None,
    ) -> str | None:
        record = self.resolve_current_record(
            entity_type_id, entity_id, revision_id, workflow_id, language_code
        )
        if record is None:
            return None
        if language_code is None:
            return record.state_id
        return record.get_translation_state(language_code)

    def latest_record(self, entity_type_id: str, entity_id: str, workflow_id: str) -> StateRecord | None:
        """Newest row of any revision of the entity."""
        rows = self._rows(entity_type_id, entity_id, workflow_id)
        return rows[0] if rows else None

    # ---- writes ----

    def commit(self, record: StateRecord) -> StateRecord:
        """Persist ``record`` as the newest row of its key.

        Committing content identical to the key's newest row is a no-op and
        returns that row.
        """
        key = record.key
        current = self.resolve_current_record(
            key.entity_type_id, key.entity_id, key.revision_id, key.workflow_id
        )
        if current is not None and current.same_content(record):
            logger.debug("State row for %s unchanged, skipping commit", _describe(key))
            return current

        row = record.model_copy(update={"sequence": self._backend.next_sequence()}, deep=True)
        if self._pending is not None:
            self._pending.append(row)
        else:
            self._backend.save_records([row])
        logger.info("Committed state %r for %s (seq %d)", row.state_id, _describe(key), row.sequence)
        return row

    @contextmanager
    def transaction(self) -> Iterator[StateStore]:
        """Buffer commits until the block completes; discard them on error."""
        if self._pending is not None:
            # joins the outer transaction
            yield self
            return

        self._pending = []
        try:
            yield self
        except BaseException:
            logger.warning("Discarding %d uncommitted state rows", len(self._pending))
            raise
        else:
            self._backend.save_records(self._pending)
        finally:
            self._pending = None


def _describe(key: TrackedEntityKey) -> str:
    return f"{key.entity_type_id}/{key.entity_id}@{key.revision_id} [{key.workflow_id}]"
