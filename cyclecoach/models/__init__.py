"""
Data models for profiles, cycle phases, recommendation cards and chat turns.
"""
