"""Domain layer for DocLite.

Entities and services here have no dependencies on infrastructure or
external frameworks.
"""
