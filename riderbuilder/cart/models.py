from __future__ import annotations

from pydantic import BaseModel, Field

from ..matching.models import CelebrityMatch
from ..parsing.models import BudgetTier, ParsedRider
from ..recommendations.models import Product


class CartItem(BaseModel):
    product: Product
    quantity: int = Field(default=1, ge=1)
    reason: str | None = None


class CartBalance(BaseModel):
    snacks: int = Field(..., ge=0, le=100)
    drinks: int = Field(..., ge=0, le=100)
    protein: int = Field(..., ge=0, le=100)
    veg: int = Field(..., ge=0, le=100)


class RiderCard(BaseModel):
    products: list[Product]
    allergens: list[str]
    vibe_tags: list[str]
    people_count: int
    budget_tier: BudgetTier
    match_scores: dict[str, int] = Field(default_factory=dict)
    best_match: CelebrityMatch | None = None


# ── API bodies ──────────────────────────────────────────────────────────


class CartLine(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=99)


class CartBalanceRequest(BaseModel):
    items: list[CartLine] = Field(default_factory=list)


class RiderCardRequest(BaseModel):
    rider: ParsedRider
    items: list[CartLine] = Field(..., min_length=1)
