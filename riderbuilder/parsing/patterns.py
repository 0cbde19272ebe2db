"""
Canonical pattern library for rider extraction.

All patterns run against text that has already been through
``normalize_text`` (lower-case, å/ä -> a, ö -> o, é -> e), so they are
written without diacritics. The order of each rule table is significant: it
is the tie-break order when two tags end up with the same accumulated weight.

Very short Swedish stems ("ra", "bar", "ost", "ren", ...) are anchored on
word boundaries, otherwise they fire inside unrelated words.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .models import BudgetTier

PATTERN_LIBRARY_VERSION = "2.0"


@dataclass(frozen=True)
class PatternRule:
    tag: str
    pattern: re.Pattern[str]
    weight: float = 1.0


def _rule(tag: str, pattern: str, weight: float = 1.0) -> PatternRule:
    return PatternRule(tag=tag, pattern=re.compile(pattern), weight=weight)


def count_matches(pattern: re.Pattern[str], text: str) -> int:
    """Number of non-overlapping matches of ``pattern`` in ``text``."""
    return sum(1 for _ in pattern.finditer(text))


def tag_names(rules: tuple[PatternRule, ...]) -> list[str]:
    return [r.tag for r in rules]


# ---------------------------------------------------------------------------
# People count
# ---------------------------------------------------------------------------

# (pattern, offset) ordered from most to least specific. The captured group
# is the number; offset is added to it ("mig och 3" means four people).
PEOPLE_COUNT_RULES: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"(\d+)\s*(?:personer|person|pers|st|stycken)"), 0),
    (re.compile(r"for\s*(\d+)"), 0),
    (re.compile(r"(\d+)\s*(?:man|kvinnor|gaster|guests|people)"), 0),
    (re.compile(r"(?:mig|jag)\s+och\s+(?:mina\s+|min\s+)?(\d+)"), 1),
    (re.compile(r"vi\s+ar\s+(\d+)"), 0),
    (re.compile(r"(\d+)\s+vanner"), 0),
)

SOLO_PATTERN = re.compile(r"\b(?:bara jag|endast jag|solo|ensam)\b")

EXPLICIT_PEOPLE_PATTERN = re.compile(r"\d+\s*(?:personer|person|pers)")
ANY_DIGIT_PATTERN = re.compile(r"\d+")

# ---------------------------------------------------------------------------
# Budget tier
# ---------------------------------------------------------------------------

# Declared order is the tie-break order: Low > High > Medium.
BUDGET_RULES: tuple[tuple[BudgetTier, re.Pattern[str]], ...] = (
    (
        BudgetTier.LOW,
        re.compile(r"budget|billig|ekonom|lag\s*kostnad|cheap|inte\s*dyr|spara|prisv.rd"),
    ),
    (
        BudgetTier.HIGH,
        re.compile(
            r"lyx|premium|exklusiv|dyr|luxury|high.?end"
            r"|pengar.*(?:ingen|spelar\s*ingen)\s*roll|basta?"
        ),
    ),
    (
        BudgetTier.MEDIUM,
        re.compile(r"mellan|medium|normal|standard|lagom|varken.*eller"),
    ),
)

BUDGET_MENTION_PATTERN = re.compile(r"budget|lyx|premium|billig|ekonom|pengar")

# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------

PREFERENCE_RULES: tuple[PatternRule, ...] = (
    _rule("vegan", r"vegan|vaxtbaserad|plant.?based|vegansk"),
    _rule("vegetarian", r"vegetarian|vegetarisk|veggo|lacto.?ovo"),
    _rule("glutenfritt", r"gluten.?fr|glutenfritt|celiak|spannmals.?fri"),
    _rule("laktosfritt", r"laktos.?fr|laktosfritt|dairy.?free|mjolk.?fri"),
    _rule("alkoholfritt", r"alkohol.?fr|alkoholfritt|non.?alcoholic|ingen\s*alkohol|nykter"),
    _rule("eko", r"ekologisk|\beko\b|organic|krav.?markt", 0.8),
    _rule("halsosam", r"halsosam|healthy|nyttig|wellness|halso", 0.8),
    _rule("energi", r"energi|energy|boost|koffein|caffeine|vaken|pigg", 0.9),
    _rule("protein", r"protein|high.?protein|muskel|gains|traning", 0.9),
    _rule("lyxig", r"lyx|lyxig|premium|exklusiv|luxury|finare", 0.8),
    _rule("minimalistisk", r"minimal|enkelt|clean|simpel|avskalat|\blite\b", 0.7),
    _rule("festlig", r"fest|party|festlig|celebrate|fira|kalas", 0.9),
    _rule("cozy", r"cozy|mysig|warm|comfort|mys|varmt", 0.8),
    _rule("focus", r"fokus|focus|koncentration|concentration|skarp", 0.8),
    _rule("raw", r"raw|\bra\b|naturell|natural|obehandlad", 0.7),
    _rule("bubbel", r"bubbel|champagne|prosecco|sparkling|cava", 0.9),
    _rule("sockerfritt", r"socker.?fr|sockerfritt|sugar.?free|lag.?socker|no\s*sugar", 0.8),
    _rule("hallbar", r"hallbar|sustainable|miljovanlig|klimatsmart", 0.7),
    _rule("lokal", r"lokal|svenskt|svensk|narproducerad|nordisk", 0.7),
)

# ---------------------------------------------------------------------------
# Allergens (presence only, weights unused)
# ---------------------------------------------------------------------------

ALLERGY_CONTEXT_PATTERN = re.compile(
    r"allergi|allergy|tal(?:er)?\s+inte|undvik|kan\s*inte\s*ata|kanslig|intoleran"
)

ALLERGEN_RULES: tuple[PatternRule, ...] = (
    _rule("notter", r"not(?:ter|allergi)|nut\s*allergy|peanut|mandel\s*allergi|jordnot|hasselnot"),
    _rule("mjolk", r"mjolk(?:allergi|protein)|dairy\s*allergy|laktos(?:intoleran)?"),
    _rule("gluten", r"gluten(?:allergi)?|celiaki|celiac|vete(?:allergi)?"),
    _rule("agg", r"\bagg(?:allergi)?|egg\s*allergy"),
    _rule("soja", r"soja(?:allergi)?|soy\s*allergy"),
    _rule("sesamfron", r"sesam(?:fron)?|sesame"),
    _rule("skaldjur", r"skaldjur|shellfish|rakallerg"),
    _rule("fisk", r"fisk(?:allergi)?|fish\s*allergy"),
    _rule("jordnotter", r"jordnot(?:ter)?(?:allergi)?|peanut"),
    _rule("selleri", r"selleri|celery"),
    _rule("senap", r"senap|mustard"),
    _rule("lupin", r"lupin"),
    _rule("blotdjur", r"blotdjur|mollusc"),
)

# ---------------------------------------------------------------------------
# Categories wanted
# ---------------------------------------------------------------------------

CATEGORY_RULES: tuple[PatternRule, ...] = (
    _rule("energidryck", r"energidryck|energy\s*drink|red\s*bull|monster|celsius|nocco\s*energi"),
    _rule("kaffe", r"kaffe|coffee|espresso|latte|cappuccino|bryggkaffe|cold\s*brew"),
    _rule("alkoholfritt", r"alkohol.?fr|non.?alcoholic|mocktail|0%|bubbel"),
    _rule("snacks", r"snacks|chips|nacho|popcorn|tilltugg|godis|jordnot", 0.9),
    _rule("proteinbar", r"protein.?bar|proteinbar|bars"),
    _rule("frukt", r"frukt|fruit|\bbar\b|berries|smoothie|jordgubb|banan|appel", 0.9),
    _rule("vego", r"vego|vegan|vegetarisk|vaxtbaserat"),
    _rule("glutenfritt", r"gluten.?fr|gluten.?free|celiaki"),
    _rule("mejeri", r"mejeri|yoghurt|\bost\b|cheese|dairy|mjolk|kvarg", 0.9),
    _rule("godis", r"godis|candy|sotsaker|sweets|choklad", 0.8),
    _rule("sportdryck", r"sportdryck|gatorade|elektrolyt|powerade|vitamin\s*well"),
    _rule("te", r"\bte\b|tea|chai|iste|ortte|matcha"),
    _rule("vatten", r"vatten|water|mineral|kolsyr|ramlosa|loka", 0.8),
    _rule("choklad", r"choklad|chocolate|cocoa|kakao|mork\s*choklad", 0.9),
)

# ---------------------------------------------------------------------------
# Vibe tags
# ---------------------------------------------------------------------------

VIBE_RULES: tuple[PatternRule, ...] = (
    _rule("warm", r"warm|varm|mysig|cozy|ombonad"),
    _rule("glam", r"glam|glamoros|lyxig|elegant|snygg|chic"),
    _rule("clean", r"clean|\bren\b|minimalist|avskalad|simpel"),
    _rule("focused", r"fokus|focus|koncentration|skarp|alert"),
    _rule("festlig", r"fest|party|celebrate|fira|\bglad\b|happy"),
    _rule("energisk", r"energisk|energetic|active|aktiv|peppad"),
    _rule("lugn", r"lugn|calm|relax|chill|avslappnad|zen"),
    _rule("trendig", r"trendig|trendy|hipster|modern|\binne\b", 0.9),
    _rule("klassisk", r"klassisk|classic|traditional|traditionell|tidlos", 0.9),
    _rule("kreativ", r"kreativ|creative|artistisk|konstnarlig", 0.8),
    _rule("sportig", r"sportig|athletic|traning|workout|fitness", 0.9),
    _rule("bohemisk", r"bohemisk|boho|hippie|\bfri\b|frihet", 0.8),
    _rule("professionell", r"professionell|business|serios|formell", 0.8),
)
