from __future__ import annotations

from collections.abc import Iterable

from ..matching.models import CelebrityRider
from ..matching.similarity import find_best_match, rank_celebrity_matches
from ..parsing.models import BudgetTier, ParsedRider
from ..recommendations.config import DEFAULT_CATALOG_CONFIG
from ..recommendations.models import Product, ProductRecommendation
from .models import CartItem, RiderCard

DEFAULT_REASON = "Bra val!"


def add_to_cart(
    items: list[CartItem],
    product: Product,
    recommendations: Iterable[ProductRecommendation] = (),
) -> list[CartItem]:
    """Return a new cart with one more unit of ``product``.

    A new line takes its reason from the product's recommendation, if any.
    """
    if any(item.product.id == product.id for item in items):
        return [
            item.model_copy(update={"quantity": item.quantity + 1})
            if item.product.id == product.id
            else item
            for item in items
        ]

    rec = next((r for r in recommendations if r.product.id == product.id), None)
    reason = rec.reasons[0] if rec else DEFAULT_REASON
    return [*items, CartItem(product=product, quantity=1, reason=reason)]


def remove_from_cart(items: list[CartItem], product_id: str) -> list[CartItem]:
    """Return a new cart with one unit of ``product_id`` removed."""
    updated: list[CartItem] = []
    for item in items:
        if item.product.id != product_id:
            updated.append(item)
        elif item.quantity > 1:
            updated.append(item.model_copy(update={"quantity": item.quantity - 1}))
    return updated


def collect_allergens(items: Iterable[CartItem]) -> list[str]:
    """Union of product allergens, in first-seen cart order."""
    seen: dict[str, None] = {}
    for item in items:
        for allergen in item.product.allergens:
            seen.setdefault(allergen, None)
    return list(seen)


def build_rider_card(
    rider: ParsedRider,
    items: list[CartItem],
    celebrities: Iterable[CelebrityRider],
    product_limit: int = DEFAULT_CATALOG_CONFIG.card_product_limit,
) -> RiderCard:
    matches = rank_celebrity_matches(rider, celebrities)
    return RiderCard(
        products=[item.product for item in items[:product_limit]],
        allergens=collect_allergens(items),
        vibe_tags=list(rider.vibe_tags),
        people_count=rider.people_count or 1,
        budget_tier=rider.budget_tier or BudgetTier.MEDIUM,
        match_scores={m.celebrity_id: m.score.total for m in matches},
        best_match=find_best_match(matches),
    )
