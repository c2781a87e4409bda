"""Request and result models for the analysis endpoints."""

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .brand import BrandVoice, Persona

Metric = Literal["tone", "brand", "persona"]
ToneType = Literal["professional", "casual", "urgent", "friendly", "techy", "playful"]
ChannelType = Literal["linkedin", "twitter", "instagram", "facebook", "email"]
OptimizationTarget = Literal["persona", "brand"]


class _ResultModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DocumentAnalysisRequest(BaseModel):
    """A validated analyze-document request with its active metric set."""

    content: str
    metrics: Tuple[Metric, ...]
    brand_voice: Optional[BrandVoice] = None
    persona: Optional[Persona] = None


class BrandAlignmentRequest(BaseModel):
    text: str
    brand_voice: BrandVoice


class PersonaAlignmentRequest(BaseModel):
    text: str
    persona: Persona


class ToneShiftRequest(BaseModel):
    text: str
    tone: ToneType


class RewriteRequest(BaseModel):
    """Copy to shorten or expand."""

    text: str


class ChannelRewriteRequest(BaseModel):
    text: str
    channel: ChannelType


class AlignmentContext(BaseModel):
    """Findings of an earlier brand or persona alignment check.

    For a brand check, ``strengths`` are its matches and ``issues`` its
    violations. Fields the client leaves out or mistypes fall back to empty.
    """

    score: Optional[Union[int, float]] = None
    assessment: str = ""
    strengths: List[str] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
            return None
        return value

    @field_validator("assessment", mode="before")
    @classmethod
    def _string_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("strengths", "issues", "recommendations", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str) and item.strip()]


class OptimizeAlignmentRequest(BaseModel):
    """A rewrite that acts on the findings of a brand or persona check."""

    text: str
    target: OptimizationTarget
    analysis: AlignmentContext
    persona: Optional[Persona] = None
    brand_voice: Optional[BrandVoice] = None

    @property
    def target_name(self) -> str:
        if self.target == "persona":
            return self.persona.name
        return self.brand_voice.brand_name


class ToneJudgment(_ResultModel):
    label: str = Field(..., description="Primary tone from the closed tone vocabulary")
    confidence: Union[int, float] = Field(..., description="Confidence percentage, 0-100")


class AlignmentJudgment(_ResultModel):
    score: Union[int, float] = Field(..., description="Alignment score, 1-10")
    feedback: str = ""


class DocumentAnalysis(_ResultModel):
    tone: Optional[ToneJudgment] = None
    brand_alignment: Optional[AlignmentJudgment] = Field(None, alias="brandAlignment")
    persona_alignment: Optional[AlignmentJudgment] = Field(None, alias="personaAlignment")


class BrandAlignmentResult(_ResultModel):
    score: Union[int, float] = Field(..., description="Alignment score, 1-10")
    assessment: str = ""
    matches: List[str] = Field(default_factory=list)
    violations: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class PersonaAlignmentResult(_ResultModel):
    score: Union[int, float] = Field(..., description="Alignment score, 1-10")
    assessment: str = ""
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class RewriteResult(_ResultModel):
    rewritten_text: str = Field(..., alias="rewrittenText")


class OptimizationResult(RewriteResult):
    changes_summary: List[str] = Field(default_factory=list, alias="changesSummary")
