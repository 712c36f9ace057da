from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class EvidenceQuality(str, Enum):
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"
    AMBIGUOUS = "ambiguous"


class AutomationLevel(str, Enum):
    GENERATE = "generate"
    DRAFT = "draft"
    GUIDE = "guide"
    MANUAL = "manual"


# Most automated first.
AUTOMATION_ORDER: List[str] = [level.value for level in AutomationLevel]


class TargetLevel(str, Enum):
    SITE = "site"
    PAGE = "page"
    BOTH = "both"


class Priority(str, Enum):
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"


class DetectionState(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    PARTIAL = "PARTIAL"
    CONTENT_NO_SCHEMA = "CONTENT_NO_SCHEMA"
    SCHEMA_INVALID = "SCHEMA_INVALID"
    WEAK = "WEAK"
    BLOCKING = "BLOCKING"
    COMPLETE = "COMPLETE"


class GeneratedAsset(BaseModel):
    asset_type: str
    content: Any
    implementation_notes: List[str] = Field(default_factory=list)

    @field_validator("asset_type")
    def validate_asset_type(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("asset_type cannot be empty")
        return v


class EvidenceAssessment(BaseModel):
    quality: EvidenceQuality
    confidence: float = Field(ge=0.0, le=1.0)
    summary: str = "Evidence assessed"
    details: Dict[str, Any] = Field(default_factory=dict)


class FailingSubfactor(BaseModel):
    category: str
    subfactor: str
    score: float
    threshold: float
    gap: float


class Recommendation(BaseModel):
    rec_key: str
    pillar: str
    subfactor_key: str
    gap: str
    finding: str = ""
    why_it_matters: str = ""
    recommendation: str = ""
    what_to_include: str = ""
    how_to_implement: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    automation_level: AutomationLevel
    confidence: float = Field(ge=0.0, le=1.0)
    evidence_quality: EvidenceQuality
    evidence_summary: str = ""
    target_level: TargetLevel
    target_url: Optional[str] = None
    target_description: str = ""
    evidence_json: Dict[str, Any] = Field(default_factory=dict)
    generated_assets: List[GeneratedAsset] = Field(default_factory=list)
    detection_state: Optional[DetectionState] = None

    @model_validator(mode="after")
    def validate_page_target(self) -> "Recommendation":
        """A page-scoped recommendation must point at a concrete page."""
        if self.target_level == TargetLevel.PAGE and not (self.target_url or "").strip():
            raise ValueError(f"{self.subfactor_key}: page-level recommendation requires target_url")
        return self
