from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ParserConfig:
    parser: str = os.getenv("RIDER_PARSER", "heuristic")


DEFAULT_PARSER_CONFIG = ParserConfig()
