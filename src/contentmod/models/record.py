"""Moderation state records keyed by tracked entity revision."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TrackedEntityKey(BaseModel):
    """Identifies the state record of one entity revision under one workflow."""

    model_config = ConfigDict(frozen=True)

    entity_type_id: str
    entity_id: str
    revision_id: int
    workflow_id: str

    @property
    def partition(self) -> str:
        """Grouping shared by every revision of the same entity and workflow."""
        return f"{self.entity_type_id}#{self.entity_id}#{self.workflow_id}"


class StateRecord(BaseModel):
    """One history row of a tracked revision's moderation state.

    ``state_id`` belongs to ``language_code`` (the record's own language);
    ``translations`` holds the state of every other language variant.
    ``sequence`` orders rows across the whole store, higher is newer.
    """

    key: TrackedEntityKey
    state_id: str
    language_code: str | None = None
    translations: dict[str, str] = Field(default_factory=dict)
    sequence: int = 0

    def has_translation(self, language_code: str) -> bool:
        return language_code == self.language_code or language_code in self.translations

    def add_translation(self, language_code: str) -> None:
        """Branch a new language variant off the record's own state."""
        if not self.has_translation(language_code):
            self.translations[language_code] = self.state_id

    def get_translation_state(self, language_code: str) -> str:
        if language_code == self.language_code or language_code not in self.translations:
            return self.state_id
        return self.translations[language_code]

    def with_state(self, language_code: str | None, state_id: str) -> StateRecord:
        """Copy of this record with the given language variant moved to ``state_id``."""
        if language_code is None or language_code == self.language_code:
            return self.model_copy(update={"state_id": state_id, "sequence": 0}, deep=True)
        translations = dict(self.translations)
        translations[language_code] = state_id
        return self.model_copy(update={"translations": translations, "sequence": 0}, deep=True)

    def same_content(self, other: StateRecord) -> bool:
        """True when both records would persist the same state, ignoring sequence."""
        return (
            self.key == other.key
            and self.state_id == other.state_id
            and self.language_code == other.language_code
            and self.translations == other.translations
        )
