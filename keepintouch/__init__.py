"""Relationship tracking service: who to stay in touch with and when."""
