"""
Festival rider builder.

Turns a free-text festival rider into structured preferences and scores a
product catalog, reference riders and carts against it.
"""
