"""Write payloads for the brand voice and persona tables."""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PERSONA_NAME_MAX_LENGTH = 100
PHOTO_MAX_BYTES = 2 * 1024 * 1024


def _check_photo_size(value: Optional[str]) -> Optional[str]:
    """Reject inline ``data:image/`` photos that decode to more than 2 MB."""
    if value and value.startswith("data:image/"):
        _, _, encoded = value.partition(",")
        if math.ceil(len(encoded) * 3 / 4) > PHOTO_MAX_BYTES:
            raise ValueError("Photo size too large. Please use an image smaller than 2MB.")
    return value


def _check_persona_name(value: Any, empty_message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(empty_message)
    value = value.strip()
    if len(value) > PERSONA_NAME_MAX_LENGTH:
        raise ValueError(f"Persona name cannot exceed {PERSONA_NAME_MAX_LENGTH} characters")
    return value


class BrandVoiceRecord(BaseModel):
    """Columns written by a brand voice upsert. Malformed optional fields fall back to empty."""

    model_config = ConfigDict(extra="ignore")

    brand_name: str = Field(None, validate_default=True)
    brand_tone: str = ""
    approved_phrases: List[str] = Field(default_factory=list)
    forbidden_words: List[str] = Field(default_factory=list)
    brand_values: List[str] = Field(default_factory=list)
    mission_statement: str = ""

    @field_validator("brand_name", mode="before")
    @classmethod
    def _brand_name_required(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Brand name is required")
        return value.strip()

    @field_validator("brand_tone", "mission_statement", mode="before")
    @classmethod
    def _string_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("approved_phrases", "forbidden_words", "brand_values", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> List[Any]:
        return value if isinstance(value, list) else []


class PersonaCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(None, validate_default=True)
    photo_url: Optional[str] = None
    demographics: str = ""
    psychographics: str = ""
    pain_points: str = ""
    language_patterns: str = ""
    goals: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, value: Any) -> str:
        return _check_persona_name(value, "Persona name is required")

    @field_validator("photo_url")
    @classmethod
    def _photo_size(cls, value: Optional[str]) -> Optional[str]:
        return _check_photo_size(value)

    @field_validator(
        "demographics", "psychographics", "pain_points", "language_patterns", "goals",
        mode="before",
    )
    @classmethod
    def _trimmed(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class PersonaUpdate(BaseModel):
    """Partial persona update. Only fields present in the body are written."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    photo_url: Optional[str] = None
    demographics: Optional[str] = None
    psychographics: Optional[str] = None
    pain_points: Optional[str] = None
    language_patterns: Optional[str] = None
    goals: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_not_empty(cls, value: Any) -> str:
        return _check_persona_name(value, "Persona name cannot be empty")

    @field_validator("photo_url")
    @classmethod
    def _photo_size(cls, value: Optional[str]) -> Optional[str]:
        return _check_photo_size(value)
