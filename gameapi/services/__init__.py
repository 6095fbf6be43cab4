"""Domain services: credentials, sessions, ownership, resources and ranking.

HTTP routes resolve the caller and hand it explicitly to these services,
keeping transport concerns separated from the ownership and scoring rules.
"""
