from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .config import DEFAULT_PARSER_CONFIG, ParserConfig
from .models import BudgetTier, ParseConfidence, ParsedRider, ParseResult
from .normalizer import normalize_text
from .patterns import (
    ALLERGEN_RULES,
    ALLERGY_CONTEXT_PATTERN,
    ANY_DIGIT_PATTERN,
    BUDGET_MENTION_PATTERN,
    BUDGET_RULES,
    CATEGORY_RULES,
    EXPLICIT_PEOPLE_PATTERN,
    PEOPLE_COUNT_RULES,
    PREFERENCE_RULES,
    SOLO_PATTERN,
    VIBE_RULES,
    PatternRule,
    count_matches,
)

logger = logging.getLogger(__name__)

MAX_PEOPLE = 100

# Weights for the overall confidence; they sum to 1.0.
CONFIDENCE_WEIGHTS: dict[str, float] = {
    "people_count": 0.15,
    "budget_tier": 0.10,
    "preferences": 0.25,
    "allergens": 0.20,
    "categories": 0.20,
    "vibe": 0.10,
}


class RiderParser(ABC):
    """Turns rider text into a ParsedRider.

    Scoring code only depends on this interface, so a different parser can
    be registered in ``_PARSERS`` without touching anything downstream.
    """

    @abstractmethod
    def parse(self, text: str) -> ParsedRider:
        ...


# ---------------------------------------------------------------------------
# Field extractors (operate on normalized text)
# ---------------------------------------------------------------------------


def _extract_people_count(text: str) -> int | None:
    for pattern, offset in PEOPLE_COUNT_RULES:
        match = pattern.search(text)
        if not match:
            continue
        count = int(match.group(1)) + offset
        if 0 < count < MAX_PEOPLE:
            return count

    if SOLO_PATTERN.search(text):
        return 1

    return None


def _extract_budget_tier(text: str) -> BudgetTier | None:
    best_tier: BudgetTier | None = None
    best_count = 0
    # Strictly greater keeps the earlier tier on ties
    for tier, pattern in BUDGET_RULES:
        count = count_matches(pattern, text)
        if count > best_count:
            best_tier, best_count = tier, count
    return best_tier


def _weighted_tags(text: str, rules: tuple[PatternRule, ...]) -> list[str]:
    """Accumulate occurrences x weight per tag, highest first.

    ``sorted`` is stable, so equal scores keep the rule table order.
    """
    scored: list[tuple[str, float]] = []
    for rule in rules:
        occurrences = count_matches(rule.pattern, text)
        if occurrences:
            scored.append((rule.tag, occurrences * rule.weight))

    ranked = sorted(
        (item for item in scored if item[1] > 0),
        key=lambda item: item[1],
        reverse=True,
    )
    return [tag for tag, _ in ranked]


def _extract_allergens(text: str) -> list[str]:
    return [rule.tag for rule in ALLERGEN_RULES if rule.pattern.search(text)]


def has_allergy_context(text: str) -> bool:
    return ALLERGY_CONTEXT_PATTERN.search(text) is not None


# ---------------------------------------------------------------------------
# Confidence heuristics
# ---------------------------------------------------------------------------


def _people_confidence(text: str, count: int | None) -> float:
    if not count:
        return 0.0
    if EXPLICIT_PEOPLE_PATTERN.search(text):
        return 0.95
    if ANY_DIGIT_PATTERN.search(text):
        return 0.7
    return 0.5


def _budget_confidence(text: str, tier: BudgetTier | None) -> float:
    if tier is None:
        return 0.0
    mentions = count_matches(BUDGET_MENTION_PATTERN, text)
    return min(0.9, 0.4 + mentions * 0.2)


def _list_confidence(values: list[str]) -> float:
    if not values:
        return 0.0
    return min(0.95, 0.3 + len(values) * 0.1)


# ---------------------------------------------------------------------------
# Heuristic parser
# ---------------------------------------------------------------------------


class HeuristicRiderParser(RiderParser):
    """Regex/keyword rider parser backed by the pattern library."""

    def parse(self, text: str) -> ParsedRider:
        normalized = normalize_text(text)
        rider = ParsedRider(
            people_count=_extract_people_count(normalized),
            budget_tier=_extract_budget_tier(normalized),
            preferences=_weighted_tags(normalized, PREFERENCE_RULES),
            allergens_avoid=_extract_allergens(normalized),
            categories_wanted=_weighted_tags(normalized, CATEGORY_RULES),
            vibe_tags=_weighted_tags(normalized, VIBE_RULES),
            raw_text=text,
        )
        logger.debug(
            "Parsed rider: %d preferences, %d allergens, %d categories, %d vibes",
            len(rider.preferences),
            len(rider.allergens_avoid),
            len(rider.categories_wanted),
            len(rider.vibe_tags),
        )
        return rider

    def parse_with_confidence(self, text: str) -> ParseResult:
        rider = self.parse(text)
        normalized = normalize_text(text)

        scores = {
            "people_count": _people_confidence(normalized, rider.people_count),
            "budget_tier": _budget_confidence(normalized, rider.budget_tier),
            "preferences": _list_confidence(rider.preferences),
            "allergens": _list_confidence(rider.allergens_avoid),
            "categories": _list_confidence(rider.categories_wanted),
            "vibe": _list_confidence(rider.vibe_tags),
        }
        overall = sum(scores[name] * weight for name, weight in CONFIDENCE_WEIGHTS.items())

        confidence = ParseConfidence(
            **scores,
            overall=round(overall, 4),
            allergy_context=has_allergy_context(normalized),
        )
        return ParseResult(rider=rider, confidence=confidence)


_PARSERS: dict[str, type[RiderParser]] = {
    "heuristic": HeuristicRiderParser,
}


def get_rider_parser(config: ParserConfig = DEFAULT_PARSER_CONFIG) -> RiderParser:
    parser_cls = _PARSERS.get(config.parser)
    if parser_cls is None:
        logger.warning("Unknown rider parser %r, using heuristic parser", config.parser)
        parser_cls = HeuristicRiderParser
    return parser_cls()


def parse_rider_text(text: str) -> ParsedRider:
    return get_rider_parser().parse(text)


def parse_rider_with_confidence(text: str) -> ParseResult:
    return HeuristicRiderParser().parse_with_confidence(text)
