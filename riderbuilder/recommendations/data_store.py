from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from ..matching.models import CelebrityRider
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Product

logger = logging.getLogger(__name__)

# Keyed by source file so a second CatalogConfig loads its own catalog
_products: dict[Path, list[Product]] = {}
_celebrities: dict[Path, list[CelebrityRider]] = {}


def _split_list(value: object) -> list[str]:
    if not isinstance(value, str):
        return []
    return [item.strip().lower() for item in value.split(",") if item.strip()]


def _optional(value: object) -> str | None:
    return str(value) if pd.notna(value) and str(value).strip() else None


def _load_products(config: CatalogConfig) -> list[Product]:
    df = pd.read_csv(config.products_path, dtype={"id": str})

    # Pre-parse comma separated tag and allergen columns into lists
    df["tags_list"] = df["tags"].apply(_split_list)
    df["allergens_list"] = df["allergens"].apply(_split_list)
    df["category"] = df["category"].fillna("").str.strip().str.lower()

    products: list[Product] = []
    for _, row in df.iterrows():
        products.append(Product(
            id=str(row["id"]),
            name=row["name"],
            brand=_optional(row.get("brand")) or "",
            category=row["category"],
            tags=row["tags_list"],
            allergens=row["allergens_list"],
            price_tier=int(row["price_tier"]),
            festival_fit=int(row["festival_fit"]),
            image=_optional(row.get("image")),
            description=_optional(row.get("description")),
        ))

    logger.info("Loaded %d products from %s", len(products), config.products_path)
    return products


def _load_celebrities(config: CatalogConfig) -> list[CelebrityRider]:
    with config.celebrities_path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    celebrities = [CelebrityRider.model_validate(item) for item in raw]
    logger.info("Loaded %d celebrity riders from %s", len(celebrities), config.celebrities_path)
    return celebrities


def get_products(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[Product]:
    """Return the product catalog in file order, loading it on first call."""
    path = config.products_path
    if path not in _products:
        _products[path] = _load_products(config)
    return _products[path]


def get_product(product_id: str) -> Product | None:
    for product in get_products():
        if product.id == product_id:
            return product
    return None


def get_celebrities(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[CelebrityRider]:
    path = config.celebrities_path
    if path not in _celebrities:
        _celebrities[path] = _load_celebrities(config)
    return _celebrities[path]


def get_celebrity(celebrity_id: str) -> CelebrityRider | None:
    for celebrity in get_celebrities():
        if celebrity.id == celebrity_id:
            return celebrity
    return None


def reload() -> None:
    """Drop cached catalogs so the next access re-reads the files."""
    _products.clear()
    _celebrities.clear()
