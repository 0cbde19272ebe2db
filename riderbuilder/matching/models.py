from __future__ import annotations

from pydantic import BaseModel, Field

from ..parsing.models import ParsedRider


class CelebrityRider(BaseModel):
    id: str
    name: str
    handle: str
    description: str = ""
    vibe: str = ""
    parsed_rider: ParsedRider
    suggested_products: list[str] = Field(default_factory=list)
    avatar: str | None = None
    disclaimer: str = ""


class MatchScore(BaseModel):
    total: int = Field(..., ge=0, le=100)
    preference_match: int = Field(..., ge=0, le=100)
    # Overlap of the two avoidance lists, not a hazard flag
    allergen_conflict: int = Field(..., ge=0, le=100)
    category_match: int = Field(..., ge=0, le=100)
    vibe_match: int = Field(..., ge=0, le=100)


class CelebrityMatch(BaseModel):
    celebrity_id: str
    name: str
    score: MatchScore


class CelebrityMatchRequest(BaseModel):
    rider: ParsedRider


class CelebrityMatchResponse(BaseModel):
    matches: list[CelebrityMatch]
    best_match: CelebrityMatch | None = None
