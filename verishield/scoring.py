"""
Category Scorer
Turns a category's signal set into a 0-100 sub-score and a list of
human-readable pass/fail lines.
"""

import logging

from .config import (
    MAX_SCORE,
    METADATA_PENALTIES,
    MIN_SCORE,
    VIRALITY_PENALTIES,
    VISUAL_PENALTIES,
)
from .models import (
    MetadataAnalysis,
    MetadataSignals,
    ViralityAnalysis,
    ViralitySignals,
    VisualAnalysis,
    VisualSignals,
)

logger = logging.getLogger(__name__)

AUDIO_VISUAL_DETAIL = "Visual analysis not applicable for audio files"

# Signal value that counts against the category (default True)
METADATA_ADVERSE_WHEN = {
    "has_exif": False,
    "exif_integrity": False,
    "timestamp_consistency": False,
    "geolocation_present": False,
    "device_info": False,
    "modification_detected": True
}

# (line when clean, line when adverse); None means no line
METADATA_DETAILS = {
    "has_exif": ("✓ EXIF metadata present", "✗ EXIF metadata missing or stripped"),
    "exif_integrity": ("✓ EXIF data appears intact", "✗ EXIF data shows signs of tampering"),
    "timestamp_consistency": ("✓ Timestamps are consistent", "✗ Timestamp inconsistencies detected"),
    "geolocation_present": ("✓ Geolocation data available", "○ No geolocation information"),
    "device_info": ("✓ Device information present", "○ No device information"),
    "modification_detected": (None, "⚠ Post-capture modifications detected")
}

VISUAL_DETAILS = {
    "compression_artifacts": ("✓ Compression patterns normal", "⚠ Unusual compression artifacts detected"),
    "inconsistent_lighting": ("✓ Lighting appears natural", "⚠ Inconsistent lighting detected"),
    "unrealistic_shadows": ("✓ Shadow patterns normal", "⚠ Suspicious shadow patterns"),
    "edge_anomalies": ("✓ Edge analysis passed", "⚠ Edge anomalies detected"),
    "color_distribution": ("✓ Color distribution normal", "⚠ Abnormal color distribution"),
    "noise_patterns": ("✓ Noise distribution normal", "⚠ Unusual noise patterns")
}

VIRALITY_DETAILS = {
    "suspicious_pattern": ("✓ Distribution pattern normal", "⚠ Matches viral misinformation patterns"),
    "emotional_manipulation": ("✓ No emotional manipulation detected", "⚠ Emotional manipulation indicators present"),
    "urgency_indicators": ("✓ No artificial urgency", "⚠ Urgency indicators detected"),
    "clickbait_elements": ("✓ No clickbait elements", "⚠ Clickbait elements detected"),
    "context_mismatch": ("✓ Context appears consistent", "⚠ Potential context mismatch")
}


def _score_category(signals, penalties: dict, detail_lines: dict, adverse_when: dict = None) -> tuple:
    """Apply the penalty table to a signal set; return (score, details)."""
    adverse_when = adverse_when or {}
    score = MAX_SCORE
    details = []

    for field, penalty in penalties.items():
        adverse = getattr(signals, field) == adverse_when.get(field, True)
        if adverse:
            score -= penalty

        clean_line, adverse_line = detail_lines[field]
        line = adverse_line if adverse else clean_line
        if line is not None:
            details.append(line)

    # Clamp score
    score = max(MIN_SCORE, min(score, MAX_SCORE))
    return score, tuple(details)


def score_metadata(signals: MetadataSignals) -> MetadataAnalysis:
    """Score metadata integrity signals."""
    score, details = _score_category(signals, METADATA_PENALTIES, METADATA_DETAILS, METADATA_ADVERSE_WHEN)
    logger.debug(f"Metadata score: {score}")
    return MetadataAnalysis(score=score, signals=signals, details=details)


def score_visual(signals: VisualSignals) -> VisualAnalysis:
    """Score visual heuristic signals."""
    score, details = _score_category(signals, VISUAL_PENALTIES, VISUAL_DETAILS)
    logger.debug(f"Visual score: {score}")
    return VisualAnalysis(score=score, signals=signals, details=details)


def score_virality(signals: ViralitySignals) -> ViralityAnalysis:
    """Score virality risk signals."""
    score, details = _score_category(signals, VIRALITY_PENALTIES, VIRALITY_DETAILS)
    logger.debug(f"Virality score: {score}")
    return ViralityAnalysis(score=score, signals=signals, details=details)


def not_applicable_visual() -> VisualAnalysis:
    """Fixed perfect visual result used for audio, where visual heuristics don't apply."""
    signals = VisualSignals(**{field: False for field in VISUAL_PENALTIES})
    return VisualAnalysis(score=MAX_SCORE, signals=signals, details=(AUDIO_VISUAL_DETAIL,))
