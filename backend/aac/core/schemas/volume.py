from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict, Field, field_validator

from aac.core.models.base import AppBaseModel


class VolumeItem(AppBaseModel):
    """One raw item of a volume document, before it is tagged with its volume.

    Volume documents are produced by an external batch tool, so unknown fields
    are ignored rather than rejected.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    file_name: str
    slug: str
    category: str
    tags: list[str] = Field(default_factory=list)
    added_on: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: object) -> object:
        return [] if v is None else v


class VolumeDocument(AppBaseModel):
    """Raw `meta.json` document of one volume."""

    model_config = ConfigDict(extra="ignore")

    items: list[VolumeItem]


class VolumeStatus(str, Enum):
    """Per-volume lifecycle as tracked by the loader."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class LoadOutcome(str, Enum):
    LOADED = "loaded"
    ALREADY_LOADED = "already_loaded"
    FAILED = "failed"


class VolumeLoadResult(AppBaseModel):
    """Observable outcome of a single `load` call."""

    volume: int
    outcome: LoadOutcome
    added: int = 0
    skipped: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not LoadOutcome.FAILED


class VolumeState(AppBaseModel):
    volume: int
    status: VolumeStatus
    error: str | None = None
