"""
Infrastructure utilities: logging, storage and external API clients.
"""
