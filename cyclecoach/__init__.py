"""
Cycle Coach: cycle-aware women's health coaching backend.
"""
__version__ = "0.1.0"
