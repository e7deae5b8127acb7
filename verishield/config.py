"""
Configuration for the VeriShield analysis engine.
"""
import os

SERVICE_NAME = "VeriShield"
VERSION = "1.0.0"

# Category weights for risk fusion (must sum to 1.0)
FUSION_WEIGHTS = {
    "metadata": 0.35,
    "visual": 0.40,
    "virality": 0.25
}

# Inclusive lower bounds, checked top-down: >= 70 low, >= 40 medium, else high
LOW_RISK_THRESHOLD = 70
MEDIUM_RISK_THRESHOLD = 40

# Category scores below this are named as issues in the summary
SUMMARY_ISSUE_THRESHOLD = 70

MAX_SCORE = 100
MIN_SCORE = 0

# Penalty per adverse signal, keyed by signal field, in detail order
METADATA_PENALTIES = {
    "has_exif": 20,
    "exif_integrity": 25,
    "timestamp_consistency": 15,
    "geolocation_present": 10,
    "device_info": 10,
    "modification_detected": 30
}

VISUAL_PENALTIES = {
    "compression_artifacts": 15,
    "inconsistent_lighting": 20,
    "unrealistic_shadows": 20,
    "edge_anomalies": 25,
    "color_distribution": 10,
    "noise_patterns": 15
}

VIRALITY_PENALTIES = {
    "suspicious_pattern": 25,
    "emotional_manipulation": 20,
    "urgency_indicators": 15,
    "clickbait_elements": 20,
    "context_mismatch": 25
}

HISTORY_LIMIT = 10

# Demo provider latency per category, in seconds at scale 1.0
PROVIDER_LATENCY = {
    "metadata": 0.5,
    "visual": 0.6,
    "virality": 0.4
}

# Whole-analysis demo latency before the providers run, same scale factor
ANALYSIS_LATENCY = 2.0

SUPPORTED_MEDIA_PREFIXES = ("image/", "video/", "audio/")


def _optional_int(value):
    if value is None or value.strip() == "":
        return None
    return int(value)


# Environment
RANDOM_SEED = _optional_int(os.getenv("VERISHIELD_RANDOM_SEED"))
SIMULATED_LATENCY = float(os.getenv("VERISHIELD_SIMULATED_LATENCY", "0"))
MAX_UPLOAD_MB = int(os.getenv("VERISHIELD_MAX_UPLOAD_MB", "50"))
LOG_LEVEL = os.getenv("VERISHIELD_LOG_LEVEL", "INFO").upper()
