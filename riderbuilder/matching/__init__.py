"""
Rider similarity.

Compares a user's parsed rider with pre-authored celebrity riders and picks
the closest one.
"""
