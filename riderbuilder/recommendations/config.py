from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the static catalogs live and how many items the screens show.
    """

    data_dir: Path = Path(os.getenv("RIDER_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    products_filename: str = "products.csv"
    celebrities_filename: str = "celebrities.json"
    default_limit: int = 10
    card_product_limit: int = 6

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_filename

    @property
    def celebrities_path(self) -> Path:
        return self.data_dir / self.celebrities_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
