"""
Rider parsing layer.

Responsibilities:
- Normalize raw Swedish/English rider text.
- Hold the canonical pattern library for every extraction category.
- Extract a structured ParsedRider (and optional confidence scores).
- Produce edited copies of a rider when the user toggles a tag.
"""
