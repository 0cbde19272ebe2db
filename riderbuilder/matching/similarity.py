from __future__ import annotations

from collections.abc import Iterable

from ..parsing.models import ParsedRider
from ..recommendations.models import Product
from ..recommendations.scoring import round_half_up
from .models import CelebrityMatch, CelebrityRider, MatchScore

BASELINE = 20
WEIGHTS: dict[str, float] = {
    "preference": 0.35,
    "category": 0.25,
    "vibe": 0.20,
    "allergen": 0.10,
}


def _overlap_ratio(user_tags: list[str], reference_tags: list[str]) -> float:
    """Share of the user's tags that the reference also has, in [0, 100]."""
    reference = set(reference_tags)
    common = sum(1 for tag in user_tags if tag in reference)
    return min(100.0, common * 100 / max(len(user_tags), 1))


def calculate_celebrity_match_score(user: ParsedRider, reference: ParsedRider) -> MatchScore:
    preference_match = _overlap_ratio(user.preferences, reference.preferences)
    allergen_overlap = _overlap_ratio(user.allergens_avoid, reference.allergens_avoid)
    category_match = _overlap_ratio(user.categories_wanted, reference.categories_wanted)
    vibe_match = _overlap_ratio(user.vibe_tags, reference.vibe_tags)

    total = round_half_up(
        preference_match * WEIGHTS["preference"]
        + category_match * WEIGHTS["category"]
        + vibe_match * WEIGHTS["vibe"]
        + (100 - allergen_overlap) * WEIGHTS["allergen"]
        + BASELINE
    )

    return MatchScore(
        total=min(100, max(0, total)),
        preference_match=round_half_up(preference_match),
        allergen_conflict=round_half_up(allergen_overlap),
        category_match=round_half_up(category_match),
        vibe_match=round_half_up(vibe_match),
    )


def rank_celebrity_matches(
    user: ParsedRider,
    celebrities: Iterable[CelebrityRider],
) -> list[CelebrityMatch]:
    matches = [
        CelebrityMatch(
            celebrity_id=celeb.id,
            name=celeb.name,
            score=calculate_celebrity_match_score(user, celeb.parsed_rider),
        )
        for celeb in celebrities
    ]
    return sorted(matches, key=lambda m: m.score.total, reverse=True)


def find_best_match(matches: Iterable[CelebrityMatch]) -> CelebrityMatch | None:
    """Highest positive total; the first one seen wins a tie."""
    best: CelebrityMatch | None = None
    for match in matches:
        if match.score.total > (best.score.total if best else 0):
            best = match
    return best


def get_suggested_products(celebrity: CelebrityRider, products: Iterable[Product]) -> list[Product]:
    wanted = set(celebrity.suggested_products)
    return [p for p in products if p.id in wanted]
