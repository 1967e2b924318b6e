"""Static game catalogs: genres, traits, studios, professions, stat ranges, status ranks."""

from roster.game_data import genres, professions, stats, status, studios, traits

__all__ = ["genres", "professions", "stats", "status", "studios", "traits"]
