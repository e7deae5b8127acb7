"""
Data model for VeriShield analyses.
All models are immutable once built and serialize with camelCase keys.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    """Severity of a credibility signal, also used as recommendation priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Category(str, Enum):
    METADATA = "Metadata"
    VISUAL = "Visual"
    VIRALITY = "Virality"


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True
    )


class FileInfo(FrozenModel):
    """Properties of an uploaded file the engine is allowed to look at."""
    name: str = Field(min_length=1)
    content_type: str
    size: int = Field(ge=0)
    last_modified: datetime


# === Signal sets ===

class MetadataSignals(FrozenModel):
    has_exif: bool
    exif_integrity: bool
    timestamp_consistency: bool
    geolocation_present: bool
    device_info: bool
    modification_detected: bool


class VisualSignals(FrozenModel):
    compression_artifacts: bool
    inconsistent_lighting: bool
    unrealistic_shadows: bool
    edge_anomalies: bool
    color_distribution: bool
    noise_patterns: bool


class ViralitySignals(FrozenModel):
    suspicious_pattern: bool
    emotional_manipulation: bool
    urgency_indicators: bool
    clickbait_elements: bool
    context_mismatch: bool


# === Category analyses ===

class MetadataAnalysis(FrozenModel):
    score: int = Field(ge=0, le=100)
    signals: MetadataSignals
    details: tuple[str, ...]


class VisualAnalysis(FrozenModel):
    score: int = Field(ge=0, le=100)
    signals: VisualSignals
    details: tuple[str, ...]


class ViralityAnalysis(FrozenModel):
    score: int = Field(ge=0, le=100)
    signals: ViralitySignals
    details: tuple[str, ...]


# === Findings ===

class CredibilitySignal(FrozenModel):
    category: Category
    signal: str
    severity: Severity
    confidence: float = Field(ge=0.0, le=1.0)
    description: str


class ResponseRecommendation(FrozenModel):
    action: str
    priority: Severity
    description: str
    icon: str


class AnalysisResult(FrozenModel):
    """Root aggregate returned by a single analysis run."""
    id: str
    media_id: str
    timestamp: datetime
    overall_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    metadata: MetadataAnalysis
    visual: VisualAnalysis
    virality: ViralityAnalysis
    credibility_signals: tuple[CredibilitySignal, ...]
    recommendations: tuple[ResponseRecommendation, ...]
    summary: str
