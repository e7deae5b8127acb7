"""
Signal Extractor
Picks the notable raw signals out of the three category analyses and turns
them into user-facing credibility signals.

Confidence values are fixed per signal type rather than derived from how
strongly a provider measured the signal.
"""

from typing import NamedTuple

from .models import (
    Category,
    CredibilitySignal,
    MetadataAnalysis,
    Severity,
    ViralityAnalysis,
    VisualAnalysis,
)


class SignalRule(NamedTuple):
    category: Category
    field: str
    triggered_when: bool
    signal: str
    severity: Severity
    confidence: float
    description: str


# Emission order: metadata, then visual, then virality
SIGNAL_CATALOG = (
    SignalRule(Category.METADATA, "has_exif", False, "Missing EXIF Data", Severity.MEDIUM, 0.85,
               "File lacks metadata commonly present in original media"),
    SignalRule(Category.METADATA, "modification_detected", True, "Modification Detected", Severity.HIGH, 0.78,
               "File shows signs of post-capture editing or manipulation"),
    SignalRule(Category.METADATA, "timestamp_consistency", False, "Timestamp Inconsistency", Severity.MEDIUM, 0.72,
               "File timestamps don't align with expected patterns"),

    SignalRule(Category.VISUAL, "edge_anomalies", True, "Edge Anomalies", Severity.HIGH, 0.81,
               "Suspicious patterns detected at object boundaries"),
    SignalRule(Category.VISUAL, "inconsistent_lighting", True, "Lighting Inconsistency", Severity.MEDIUM, 0.75,
               "Light sources appear inconsistent across the image"),
    SignalRule(Category.VISUAL, "compression_artifacts", True, "Compression Artifacts", Severity.LOW, 0.68,
               "Unusual compression patterns suggest re-encoding"),

    SignalRule(Category.VIRALITY, "emotional_manipulation", True, "Emotional Manipulation", Severity.MEDIUM, 0.70,
               "Content designed to evoke strong emotional response"),
    SignalRule(Category.VIRALITY, "suspicious_pattern", True, "Suspicious Distribution Pattern", Severity.HIGH, 0.76,
               "File characteristics match known viral misinformation patterns"),
    SignalRule(Category.VIRALITY, "context_mismatch", True, "Context Mismatch", Severity.HIGH, 0.83,
               "Content elements suggest potential out-of-context usage"),
)


def extract_credibility_signals(
    metadata: MetadataAnalysis,
    visual: VisualAnalysis,
    virality: ViralityAnalysis
) -> tuple[CredibilitySignal, ...]:
    """Return the triggered credibility signals in catalog order."""
    signal_sets = {
        Category.METADATA: metadata.signals,
        Category.VISUAL: visual.signals,
        Category.VIRALITY: virality.signals
    }

    extracted = []
    for rule in SIGNAL_CATALOG:
        if getattr(signal_sets[rule.category], rule.field) != rule.triggered_when:
            continue
        extracted.append(CredibilitySignal(
            category=rule.category,
            signal=rule.signal,
            severity=rule.severity,
            confidence=rule.confidence,
            description=rule.description
        ))

    return tuple(extracted)
