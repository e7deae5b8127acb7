"""
Pytest fixtures for VeriShield tests. Signal sets are built explicitly so no
test depends on the random heuristic providers.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from verishield.models import Category, FileInfo, MetadataSignals, ViralitySignals, VisualSignals
from verishield.providers import SignalProvider, StaticSignalProvider


def metadata_signals(**overrides) -> MetadataSignals:
    """Clean metadata signal set with selected fields overridden."""
    values = {
        "has_exif": True,
        "exif_integrity": True,
        "timestamp_consistency": True,
        "geolocation_present": True,
        "device_info": True,
        "modification_detected": False,
    }
    values.update(overrides)
    return MetadataSignals(**values)


def visual_signals(**overrides) -> VisualSignals:
    values = {
        "compression_artifacts": False,
        "inconsistent_lighting": False,
        "unrealistic_shadows": False,
        "edge_anomalies": False,
        "color_distribution": False,
        "noise_patterns": False,
    }
    values.update(overrides)
    return VisualSignals(**values)


def virality_signals(**overrides) -> ViralitySignals:
    values = {
        "suspicious_pattern": False,
        "emotional_manipulation": False,
        "urgency_indicators": False,
        "clickbait_elements": False,
        "context_mismatch": False,
    }
    values.update(overrides)
    return ViralitySignals(**values)


class FailingProvider(SignalProvider):
    """Provider whose detector blows up."""

    def __init__(self, category: Category, message: str = "detector crashed"):
        self.category = category
        self.message = message
        self.calls = 0

    async def detect(self, file_info, media_type):
        self.calls += 1
        raise RuntimeError(self.message)


class RaisingProvider(SignalProvider):
    """Provider that raises a given exception instance."""

    def __init__(self, category: Category, error: Exception):
        self.category = category
        self.error = error

    async def detect(self, file_info, media_type):
        raise self.error


def static_providers(metadata=None, visual=None, virality=None) -> tuple:
    return (
        StaticSignalProvider(Category.METADATA, metadata or metadata_signals()),
        StaticSignalProvider(Category.VISUAL, visual or visual_signals()),
        StaticSignalProvider(Category.VIRALITY, virality or virality_signals()),
    )


@pytest.fixture
def image_file() -> FileInfo:
    return FileInfo(
        name="protest_photo.jpg",
        content_type="image/jpeg",
        size=245_760,
        last_modified=datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def audio_file() -> FileInfo:
    return FileInfo(
        name="leaked_call.mp3",
        content_type="audio/mpeg",
        size=1_048_000,
        last_modified=datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def clean_engine():
    """Engine whose providers report no adverse signals."""
    from verishield.engine import AnalysisEngine

    return AnalysisEngine(*static_providers())


@pytest.fixture
def client(clean_engine):
    """FastAPI TestClient with a clean engine and an empty history."""
    from fastapi.testclient import TestClient

    import main
    from verishield.history import AnalysisHistory

    history = AnalysisHistory()
    main.app.dependency_overrides[main.get_engine] = lambda: clean_engine
    main.app.dependency_overrides[main.get_history] = lambda: history
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
