"""Reference entity revision models satisfying the host protocols.

Hosts with their own entity classes only need to match the protocols in
``contentmod.core.protocols``; these models back the in-memory host and the
test suite.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

NOT_SPECIFIED = "und"


class EntityRevision(BaseModel):
    """A revision of a moderated entity with no optional capabilities."""

    entity_type_id: str
    bundle: str
    entity_id: str | None = None
    revision_id: int | None = None
    loaded_revision_id: int | None = None
    language_code: str = NOT_SPECIFIED
    new: bool = False
    new_revision: bool = False
    new_translation: bool = False
    default_revision: bool = True

    @property
    def is_new(self) -> bool:
        return self.new or self.entity_id is None

    @property
    def is_new_revision(self) -> bool:
        return self.new_revision

    @property
    def is_new_translation(self) -> bool:
        return self.new_translation

    @property
    def is_default_revision(self) -> bool:
        return self.default_revision

    def set_default_revision(self, value: bool) -> None:
        self.default_revision = value


class PublishableEntityRevision(EntityRevision):
    """Entity revision carrying a published flag."""

    published: bool = False

    def is_published(self) -> bool:
        return self.published

    def set_published(self) -> None:
        self.published = True

    def set_unpublished(self) -> None:
        self.published = False


class TranslatableEntityRevision(PublishableEntityRevision):
    """Publishable entity revision with language variants."""

    other_languages: list[str] = Field(default_factory=list)

    def translation_languages(self) -> list[str]:
        languages = [self.language_code]
        languages.extend(lang for lang in self.other_languages if lang != self.language_code)
        return languages
