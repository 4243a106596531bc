"""
Bravely Infrastructure Layer

Persistence, metrics and error monitoring integrations.
Storage is reached through the ProgressStore interface for testability.
"""
