"""Pydantic models describing a compendium export document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CompendiumBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SystemPayload(CompendiumBaseModel):
    slug: str | None = None

    _normalize_slug = field_validator("slug", mode="before")(_blank_to_none)


class DaggerheartFlags(CompendiumBaseModel):
    slug: str | None = None

    _normalize_slug = field_validator("slug", mode="before")(_blank_to_none)


class FlagsPayload(CompendiumBaseModel):
    daggerheart: DaggerheartFlags = Field(default_factory=DaggerheartFlags)


class DocumentPayload(CompendiumBaseModel):
    """One exported document; ids and system subtypes are not carried over."""

    name: str
    img: str | None = None
    system: SystemPayload = Field(default_factory=SystemPayload)
    flags: FlagsPayload = Field(default_factory=FlagsPayload)

    _normalize_img = field_validator("img", mode="before")(_blank_to_none)


class CompendiumExport(CompendiumBaseModel):
    id: str
    label: str | None = None
    document_name: str = Field(alias="type")
    locked: bool = False
    documents: list[DocumentPayload] = Field(default_factory=list[DocumentPayload])
