"""Normalized player roster entry."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class NormalizedPlayer(BaseModel):
    """Roster entry written to ``players.json``."""

    id: Optional[int] = None
    first_name: Optional[str] = Field(default=None, alias="fn")
    last_name: Optional[str] = Field(default=None, alias="ln")
    name: str = ""
    hand: Optional[str] = None
    dob: Optional[int] = None
    ioc: Optional[str] = None
    height: Optional[int] = Field(default=None, alias="ht")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_artifact(self) -> dict:
        return self.model_dump(by_alias=True)
