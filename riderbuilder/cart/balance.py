from __future__ import annotations

from collections.abc import Iterable

from ..recommendations.models import Product, ProductCategory
from ..recommendations.scoring import round_half_up
from .models import CartBalance, CartItem

SNACK_CATEGORIES = frozenset({
    ProductCategory.snacks,
    ProductCategory.godis,
    ProductCategory.choklad,
})
DRINK_CATEGORIES = frozenset({
    ProductCategory.energidryck,
    ProductCategory.kaffe,
    ProductCategory.alkoholfritt,
    ProductCategory.sportdryck,
    ProductCategory.te,
    ProductCategory.vatten,
})
PROTEIN_CATEGORIES = frozenset({ProductCategory.proteinbar, ProductCategory.mejeri})
PROTEIN_TAG = "protein"
VEG_CATEGORIES = frozenset({ProductCategory.frukt, ProductCategory.vego})


def expand_cart(items: Iterable[CartItem]) -> list[Product]:
    """One entry per unit, so quantities weigh into the balance."""
    return [item.product for item in items for _ in range(item.quantity)]


def _is_protein(product: Product) -> bool:
    return product.category in PROTEIN_CATEGORIES or PROTEIN_TAG in product.tags


def calculate_cart_balance(products: list[Product]) -> CartBalance:
    """Percentage of the cart in each bucket.

    Buckets are independent, so the four values need not add up to 100.
    """
    total = len(products) or 1

    snacks = sum(1 for p in products if p.category in SNACK_CATEGORIES)
    drinks = sum(1 for p in products if p.category in DRINK_CATEGORIES)
    protein = sum(1 for p in products if _is_protein(p))
    veg = sum(1 for p in products if p.category in VEG_CATEGORIES)

    return CartBalance(
        snacks=round_half_up(snacks * 100 / total),
        drinks=round_half_up(drinks * 100 / total),
        protein=round_half_up(protein * 100 / total),
        veg=round_half_up(veg * 100 / total),
    )
