from __future__ import annotations

from .models import ParsedRider

_TAG_FIELDS = ("preferences", "allergens_avoid", "categories_wanted", "vibe_tags")


def toggle_tag(rider: ParsedRider, field: str, tag: str) -> ParsedRider:
    """Return a copy of ``rider`` with ``tag`` removed from or appended to ``field``."""
    if field not in _TAG_FIELDS:
        raise ValueError(f"Cannot toggle tags on field {field!r}")

    current: list[str] = getattr(rider, field)
    if tag in current:
        updated = [t for t in current if t != tag]
    else:
        updated = [*current, tag]
    return rider.model_copy(update={field: updated})


def toggle_preference(rider: ParsedRider, preference: str) -> ParsedRider:
    return toggle_tag(rider, "preferences", preference)


def toggle_allergen(rider: ParsedRider, allergen: str) -> ParsedRider:
    return toggle_tag(rider, "allergens_avoid", allergen)
