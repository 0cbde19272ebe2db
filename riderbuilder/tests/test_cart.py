from __future__ import annotations

from riderbuilder.cart.balance import calculate_cart_balance, expand_cart
from riderbuilder.cart.models import CartItem
from riderbuilder.cart.operations import (
    add_to_cart,
    build_rider_card,
    collect_allergens,
    remove_from_cart,
)
from riderbuilder.matching.models import CelebrityRider
from riderbuilder.parsing.models import BudgetTier, ParsedRider
from riderbuilder.recommendations.models import Product, ProductRecommendation


def _product(pid, category, tags=(), allergens=()):
    return Product(
        id=pid,
        name=pid,
        category=category,
        tags=list(tags),
        allergens=list(allergens),
        price_tier=1,
        festival_fit=3,
    )


CHIPS = _product("chips", "snacks", allergens=["mjolk"])
COFFEE = _product("coffee", "kaffe")
BAR = _product("bar", "proteinbar", allergens=["notter", "mjolk"])
BANANA = _product("banana", "frukt")
CRACKERS = _product("crackers", "glutenfritt", tags=["protein"])
WATER = _product("water", "vatten")


# ── Balance ──────────────────────────────────────────────────────────────


class TestCartBalance:
    def test_empty_cart(self):
        balance = calculate_cart_balance([])
        assert balance.model_dump() == {"snacks": 0, "drinks": 0, "protein": 0, "veg": 0}

    def test_buckets(self):
        balance = calculate_cart_balance([CHIPS, COFFEE, BAR, BANANA, CRACKERS])
        assert balance.snacks == 20
        assert balance.drinks == 20
        assert balance.protein == 40  # bar by category, crackers by tag
        assert balance.veg == 20

    def test_quantities_expand(self):
        items = [CartItem(product=CHIPS, quantity=3), CartItem(product=COFFEE)]
        balance = calculate_cart_balance(expand_cart(items))
        assert (balance.snacks, balance.drinks, balance.protein, balance.veg) == (75, 25, 0, 0)

    def test_rounds_half_up(self):
        balance = calculate_cart_balance([CHIPS] + [WATER] * 7)
        assert balance.snacks == 13
        assert balance.drinks == 88


# ── Add / remove ─────────────────────────────────────────────────────────


class TestCartOperations:
    def test_add_new_line_uses_recommendation_reason(self):
        rec = ProductRecommendation(product=COFFEE, score=40, reasons=["Kategori: kaffe"])
        cart = add_to_cart([], COFFEE, [rec])
        assert len(cart) == 1
        assert cart[0].quantity == 1
        assert cart[0].reason == "Kategori: kaffe"

    def test_add_without_recommendation(self):
        cart = add_to_cart([], CHIPS)
        assert cart[0].reason == "Bra val!"

    def test_add_existing_increments(self):
        original = add_to_cart([], CHIPS)
        cart = add_to_cart(original, CHIPS)
        assert cart[0].quantity == 2
        assert original[0].quantity == 1

    def test_remove_decrements_then_drops(self):
        cart = [CartItem(product=CHIPS, quantity=2), CartItem(product=COFFEE)]
        cart = remove_from_cart(cart, "chips")
        assert [(i.product.id, i.quantity) for i in cart] == [("chips", 1), ("coffee", 1)]
        cart = remove_from_cart(cart, "chips")
        assert [i.product.id for i in cart] == ["coffee"]

    def test_remove_unknown_is_noop(self):
        cart = [CartItem(product=COFFEE)]
        assert remove_from_cart(cart, "missing") == cart


# ── Rider card ───────────────────────────────────────────────────────────


class TestRiderCard:
    def test_allergens_union_in_cart_order(self):
        items = [CartItem(product=CHIPS), CartItem(product=BAR), CartItem(product=COFFEE)]
        assert collect_allergens(items) == ["mjolk", "notter"]

    def test_card_defaults_and_best_match(self):
        celebs = [
            CelebrityRider(id="a", name="A", handle="@a", parsed_rider=ParsedRider()),
            CelebrityRider(
                id="b", name="B", handle="@b",
                parsed_rider=ParsedRider(vibe_tags=["lugn"]),
            ),
        ]
        rider = ParsedRider(vibe_tags=["lugn"])
        items = [CartItem(product=p) for p in (CHIPS, COFFEE, BAR, BANANA, CRACKERS, WATER, COFFEE)]
        card = build_rider_card(rider, items, celebs)

        assert len(card.products) == 6
        assert card.people_count == 1
        assert card.budget_tier == BudgetTier.MEDIUM
        assert card.vibe_tags == ["lugn"]
        assert card.match_scores == {"b": 50, "a": 30}
        assert card.best_match.celebrity_id == "b"
