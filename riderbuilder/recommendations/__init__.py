"""
Product recommendation engine.

Responsibilities:
- Load the product and celebrity catalogs.
- Score every product against a parsed rider using deterministic heuristics.
- Rank, filter and explain recommendations ready for API serialisation.
"""
