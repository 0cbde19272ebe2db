"""
Cart handling: immutable add/remove, balance analysis and the final rider card.
"""
