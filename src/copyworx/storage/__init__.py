"""Supabase-backed repositories for brand voices and personas."""

from .brand_voices import BrandVoiceRepository
from .personas import PersonaRepository

__all__ = ["BrandVoiceRepository", "PersonaRepository"]
