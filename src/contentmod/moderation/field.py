"""Single-slot computed field exposing a revision's moderation state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from contentmod.core.exceptions import InvalidIndexError
from contentmod.core.protocols import IEntityRevision
from contentmod.moderation.state_store import RevisionMode

if TYPE_CHECKING:
    from contentmod.moderation.service import ModerationService


class ModerationStateField:
    """Memoized moderation state of one entity revision.

    The value is derived on first read and cached; an absent value is never
    cached, so later reads retry the derivation.
    """

    def __init__(
        self,
        entity: IEntityRevision,
        service: ModerationService,
        mode: RevisionMode = RevisionMode.NORMAL,
    ) -> None:
        self._entity = entity
        self._service = service
        self._mode = mode
        self._value: str | None = None

    @property
    def entity(self) -> IEntityRevision:
        return self._entity

    def _compute(self) -> None:
        if self._value is None:
            self._value = self._service.compute_current_state(self._entity, self._mode)

    def get(self, index: int) -> str | None:
        if not isinstance(index, int) or isinstance(index, bool) or index != 0:
            raise InvalidIndexError(index)
        self._compute()
        return self._value

    def __getitem__(self, index: int) -> str | None:
        return self.get(index)

    def __iter__(self) -> Iterator[str]:
        self._compute()
        if self._value is not None:
            yield self._value

    def __len__(self) -> int:
        self._compute()
        return 0 if self._value is None else 1

    @property
    def value(self) -> str | None:
        return self.get(0)

    def set_value(self, state_id: str | None) -> bool:
        """Assign a new state and propagate its flags to the entity.

        Assigning None only drops the cached value.
        """
        self._value = state_id
        if state_id is None:
            return False
        return self.on_change()

    def on_change(self) -> bool:
        if self._value is None:
            return False
        return self._service.on_field_changed(self._entity, self._value)

    def invalidate(self) -> None:
        self._value = None
