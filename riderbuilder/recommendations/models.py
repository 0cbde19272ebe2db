from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..parsing.models import ParsedRider


class ProductCategory(str, Enum):
    energidryck = "energidryck"
    kaffe = "kaffe"
    alkoholfritt = "alkoholfritt"
    snacks = "snacks"
    proteinbar = "proteinbar"
    frukt = "frukt"
    vego = "vego"
    glutenfritt = "glutenfritt"
    mejeri = "mejeri"
    godis = "godis"
    sportdryck = "sportdryck"
    te = "te"
    vatten = "vatten"
    choklad = "choklad"


class Product(BaseModel):
    id: str
    name: str
    brand: str = ""
    category: ProductCategory
    tags: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    price_tier: int = Field(..., ge=1, le=3)
    festival_fit: int = Field(..., ge=1, le=5)
    image: str | None = None
    description: str | None = None


class ProductRecommendation(BaseModel):
    product: Product
    score: int = Field(..., ge=0)
    reasons: list[str] = Field(..., min_length=1)


class RecommendationRequest(BaseModel):
    rider: ParsedRider
    limit: int = Field(default=10, ge=1, le=50)


class RecommendationResponse(BaseModel):
    recommendations: list[ProductRecommendation]
    total_candidates: int
