from __future__ import annotations

from aac.core.models.base import AppBaseModel
from aac.core.schemas.phrase import UsageEvent  # noqa: TCH001


class UsageRead(AppBaseModel):
    counts: dict[str, int]
    recent: list[UsageEvent]
