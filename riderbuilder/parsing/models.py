from __future__ import annotations

from enum import IntEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BudgetTier(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


class ParsedRider(BaseModel):
    """Structured preferences extracted from (or authored as) a rider.

    Instances are frozen: edits go through ``model_copy(update=...)`` or the
    helpers in ``parsing.edits``.
    """

    model_config = ConfigDict(frozen=True)

    people_count: int | None = Field(default=None, gt=0, lt=100)
    budget_tier: BudgetTier | None = None
    preferences: list[str] = Field(default_factory=list)
    allergens_avoid: list[str] = Field(default_factory=list)
    categories_wanted: list[str] = Field(default_factory=list)
    vibe_tags: list[str] = Field(default_factory=list)
    raw_text: str | None = None

    @field_validator("preferences", "allergens_avoid", "categories_wanted", "vibe_tags")
    @classmethod
    def _unique_tags(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class ParseConfidence(BaseModel):
    people_count: float = Field(default=0.0, ge=0.0, le=1.0)
    budget_tier: float = Field(default=0.0, ge=0.0, le=1.0)
    preferences: float = Field(default=0.0, ge=0.0, le=1.0)
    allergens: float = Field(default=0.0, ge=0.0, le=1.0)
    categories: float = Field(default=0.0, ge=0.0, le=1.0)
    vibe: float = Field(default=0.0, ge=0.0, le=1.0)
    overall: float = Field(default=0.0, ge=0.0, le=1.0)
    # Generic allergy vocabulary was present. Reported only; it does not
    # change which allergens are extracted.
    allergy_context: bool = False


class ParseResult(BaseModel):
    rider: ParsedRider
    confidence: ParseConfidence


class ParseRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Rider text must not be blank")
        return value


TagField = Literal["preferences", "allergens_avoid", "categories_wanted", "vibe_tags"]


class ToggleRequest(BaseModel):
    rider: ParsedRider
    field: TagField
    tag: str = Field(..., min_length=1)
