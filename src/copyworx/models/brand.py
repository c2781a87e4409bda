from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BrandVoice(BaseModel):
    """Snapshot of a brand voice configuration sent with an analysis request."""

    model_config = ConfigDict(populate_by_name=True)

    brand_name: str = Field(..., alias="brandName", min_length=1, description="Brand name")
    brand_tone: str = Field("", alias="brandTone", description="Description of brand tone and personality")
    approved_phrases: List[str] = Field(default_factory=list, alias="approvedPhrases", description="Phrases that fit the brand voice")
    forbidden_words: List[str] = Field(default_factory=list, alias="forbiddenWords", description="Words or phrases to avoid")
    brand_values: List[str] = Field(default_factory=list, alias="brandValues", description="Core brand values")
    mission_statement: str = Field("", alias="missionStatement", description="Mission statement")

    @field_validator("brand_name")
    @classmethod
    def _brand_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Brand voice must include brandName")
        return value.strip()

    @field_validator("brand_tone", "mission_statement", mode="before")
    @classmethod
    def _none_to_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("approved_phrases", "forbidden_words", "brand_values", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value


class Persona(BaseModel):
    """Snapshot of a target persona sent with an analysis request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Persona name and title")
    demographics: str = Field("", description="Age, income, location, job title")
    psychographics: str = Field("", description="Values, interests, lifestyle, personality traits")
    pain_points: str = Field("", alias="painPoints", description="Problems and frustrations they face")
    language_patterns: str = Field("", alias="languagePatterns", description="Words and phrases they respond to")
    goals: str = Field("", description="What they want to achieve")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Persona must include a name")
        return value.strip()

    @field_validator(
        "demographics", "psychographics", "pain_points", "language_patterns", "goals",
        mode="before",
    )
    @classmethod
    def _none_to_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value
