from __future__ import annotations

from fastapi import FastAPI, HTTPException

from .cart.balance import calculate_cart_balance, expand_cart
from .cart.models import (
    CartBalance,
    CartBalanceRequest,
    CartItem,
    CartLine,
    RiderCard,
    RiderCardRequest,
)
from .cart.operations import build_rider_card
from .matching.models import CelebrityMatchRequest, CelebrityMatchResponse
from .matching.similarity import (
    find_best_match,
    get_suggested_products,
    rank_celebrity_matches,
)
from .parsing.edits import toggle_tag
from .parsing.extractor import get_rider_parser, parse_rider_with_confidence
from .parsing.models import ParsedRider, ParseRequest, ParseResult, ToggleRequest
from .parsing.patterns import (
    ALLERGEN_RULES,
    CATEGORY_RULES,
    PATTERN_LIBRARY_VERSION,
    PREFERENCE_RULES,
    VIBE_RULES,
    tag_names,
)
from .recommendations.data_store import (
    get_celebrities,
    get_celebrity,
    get_product,
    get_products,
)
from .recommendations.models import (
    Product,
    ProductCategory,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.scoring import get_recommended_products

app = FastAPI(title="Festival Rider Builder API", version="1.0.0")


def _resolve_cart(lines: list[CartLine]) -> list[CartItem]:
    items: list[CartItem] = []
    for line in lines:
        product = get_product(line.product_id)
        if product is None:
            raise HTTPException(status_code=404, detail=f"Unknown product: {line.product_id}")
        items.append(CartItem(product=product, quantity=line.quantity))
    return items


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "pattern_library_version": PATTERN_LIBRARY_VERSION,
        "product_categories": [c.value for c in ProductCategory],
        "preferences": tag_names(PREFERENCE_RULES),
        "allergens": tag_names(ALLERGEN_RULES),
        "categories": tag_names(CATEGORY_RULES),
        "vibe_tags": tag_names(VIBE_RULES),
    }


# ── Rider parsing ────────────────────────────────────────────────────────


@app.post("/parse", response_model=ParsedRider)
def parse(body: ParseRequest) -> ParsedRider:
    return get_rider_parser().parse(body.text)


@app.post("/parse/confidence", response_model=ParseResult)
def parse_confidence(body: ParseRequest) -> ParseResult:
    return parse_rider_with_confidence(body.text)


@app.post("/rider/toggle", response_model=ParsedRider)
def rider_toggle(body: ToggleRequest) -> ParsedRider:
    return toggle_tag(body.rider, body.field, body.tag)


# ── Catalog & recommendations ────────────────────────────────────────────


@app.get("/products", response_model=list[Product])
def products() -> list[Product]:
    return get_products()


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    catalog = get_products()
    ranked = get_recommended_products(catalog, body.rider)
    return RecommendationResponse(
        recommendations=ranked[: body.limit],
        total_candidates=len(ranked),
    )


# ── Celebrity riders ─────────────────────────────────────────────────────


@app.get("/celebrities")
def celebrities() -> list[dict]:
    return [c.model_dump(exclude={"parsed_rider"}) for c in get_celebrities()]


@app.get("/celebrities/{celebrity_id}")
def celebrity_detail(celebrity_id: str) -> dict:
    celebrity = get_celebrity(celebrity_id)
    if celebrity is None:
        raise HTTPException(status_code=404, detail="Celebrity rider not found")
    return {
        "celebrity": celebrity.model_dump(mode="json"),
        "suggested_products": [
            p.model_dump(mode="json") for p in get_suggested_products(celebrity, get_products())
        ],
    }


@app.post("/celebrities/match", response_model=CelebrityMatchResponse)
def celebrity_match(body: CelebrityMatchRequest) -> CelebrityMatchResponse:
    matches = rank_celebrity_matches(body.rider, get_celebrities())
    return CelebrityMatchResponse(matches=matches, best_match=find_best_match(matches))


# ── Cart ─────────────────────────────────────────────────────────────────


@app.post("/cart/balance", response_model=CartBalance)
def cart_balance(body: CartBalanceRequest) -> CartBalance:
    items = _resolve_cart(body.items)
    return calculate_cart_balance(expand_cart(items))


@app.post("/card", response_model=RiderCard)
def rider_card(body: RiderCardRequest) -> RiderCard:
    items = _resolve_cart(body.items)
    return build_rider_card(body.rider, items, get_celebrities())
