from __future__ import annotations

import re

_FOLD_TABLE = str.maketrans({"å": "a", "ä": "a", "ö": "o", "é": "e"})
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, fold Swedish diacritics and collapse whitespace."""
    folded = text.lower().translate(_FOLD_TABLE)
    return _WHITESPACE_RE.sub(" ", folded).strip()
