from __future__ import annotations

import math
from collections.abc import Iterable

from ..parsing.models import ParsedRider
from .models import Product, ProductRecommendation

FESTIVAL_FIT_POINTS = 5
PREFERENCE_POINTS = 15
CATEGORY_POINTS = 20
VIBE_POINTS = 10
ALLERGEN_PENALTY = 100
PRICE_STEP_PENALTY = 5
FESTIVAL_FIT_CALLOUT = 4

FALLBACK_REASON = "Bra allmänt val"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _preference_hits(product: Product, rider: ParsedRider) -> list[str]:
    category = product.category.value
    return [
        pref
        for pref in rider.preferences
        if pref in product.tags
        or category == pref
        or any(pref in tag for tag in product.tags)
    ]


def _vibe_hits(product: Product, rider: ParsedRider) -> list[str]:
    return [vibe for vibe in rider.vibe_tags if any(vibe in tag for tag in product.tags)]


def has_allergen_conflict(product: Product, rider: ParsedRider) -> bool:
    """True if any product allergen and avoided allergen contain one another."""
    return any(
        allergen in avoid or avoid in allergen
        for allergen in product.allergens
        for avoid in rider.allergens_avoid
    )


def calculate_product_score(product: Product, rider: ParsedRider) -> int:
    """Additive heuristic score of one product for one rider, floored at 0."""
    score = product.festival_fit * FESTIVAL_FIT_POINTS
    score += len(_preference_hits(product, rider)) * PREFERENCE_POINTS

    if product.category.value in rider.categories_wanted:
        score += CATEGORY_POINTS

    score += len(_vibe_hits(product, rider)) * VIBE_POINTS

    if has_allergen_conflict(product, rider):
        score -= ALLERGEN_PENALTY

    if rider.budget_tier is not None:
        score -= abs(product.price_tier - int(rider.budget_tier)) * PRICE_STEP_PENALTY

    return max(0, score)


def get_match_reasons(product: Product, rider: ParsedRider) -> list[str]:
    reasons: list[str] = []

    # Only exact tag hits are called out, substring hits still score
    matching_prefs = [pref for pref in rider.preferences if pref in product.tags]
    if matching_prefs:
        reasons.append(f"Matchar: {', '.join(matching_prefs)}")

    if product.category.value in rider.categories_wanted:
        reasons.append(f"Kategori: {product.category.value}")

    matching_vibes = _vibe_hits(product, rider)
    if matching_vibes:
        reasons.append(f"Vibe: {', '.join(matching_vibes)}")

    if product.festival_fit >= FESTIVAL_FIT_CALLOUT:
        reasons.append("Perfekt för festival")

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return reasons


def get_recommended_products(
    products: Iterable[Product],
    rider: ParsedRider,
    limit: int | None = None,
) -> list[ProductRecommendation]:
    """Score the catalog, drop non-positive scores and rank best first.

    Ties keep catalog order. ``limit=None`` returns every positive match.
    """
    scored: list[ProductRecommendation] = []
    for product in products:
        score = calculate_product_score(product, rider)
        if score <= 0:
            continue
        scored.append(
            ProductRecommendation(
                product=product,
                score=score,
                reasons=get_match_reasons(product, rider),
            )
        )

    ranked = sorted(scored, key=lambda rec: rec.score, reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]
    return ranked
