"""
Tests for the result assembler: orchestration, media types, failure policy
and determinism of the downstream stages.
"""

from __future__ import annotations

import asyncio
import re
from datetime import datetime, timezone

import pytest

from conftest import (
    FailingProvider,
    RaisingProvider,
    metadata_signals,
    static_providers,
    virality_signals,
    visual_signals,
)
from verishield.engine import (
    AnalysisEngine,
    detect_media_type,
    evaluate,
    generate_analysis_id,
)
from verishield.exceptions import InvalidInputError, ProviderError, VeriShieldError
from verishield.models import Category, MediaType, RiskLevel
from verishield.providers import StaticSignalProvider
from verishield.scoring import AUDIO_VISUAL_DETAIL
from verishield.summary import LOW_RISK_SUMMARY


class RawDictProvider(StaticSignalProvider):
    """Returns a plain mapping instead of a signal model."""

    def __init__(self, category, payload):
        self.category = category
        self.payload = payload

    async def detect(self, file_info, media_type):
        return self.payload


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("image/jpeg", MediaType.IMAGE),
        ("IMAGE/PNG", MediaType.IMAGE),
        ("video/mp4", MediaType.VIDEO),
        ("audio/mpeg", MediaType.AUDIO),
        ("application/pdf", MediaType.IMAGE),
        ("", MediaType.IMAGE),
    ],
)
def test_detect_media_type(content_type, expected):
    assert detect_media_type(content_type) == expected


def test_generate_analysis_id_is_unique():
    ids = {generate_analysis_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(re.fullmatch(r"analysis_\d+_[0-9a-f]{9}", i) for i in ids)


def test_all_clear_scenario(clean_engine, image_file):
    """Perfect categories: low risk, no signals, two recommendations, fixed summary."""
    before = datetime.now(timezone.utc)
    result = asyncio.run(clean_engine.analyze(image_file, "media_1"))
    after = datetime.now(timezone.utc)

    assert result.media_id == "media_1"
    assert result.overall_score == 100
    assert result.risk_level == RiskLevel.LOW
    assert result.credibility_signals == ()
    assert len(result.recommendations) == 2
    assert result.summary == LOW_RISK_SUMMARY
    assert before <= result.timestamp <= after


def test_medium_scenario(image_file):
    """Metadata 50, visual 60, virality 85 -> 63, medium."""
    engine = AnalysisEngine(*static_providers(
        metadata=metadata_signals(has_exif=False, modification_detected=True),
        visual=visual_signals(inconsistent_lighting=True, unrealistic_shadows=True),
        virality=virality_signals(urgency_indicators=True),
    ))
    result = asyncio.run(engine.analyze(image_file, "media_2"))

    assert (result.metadata.score, result.visual.score, result.virality.score) == (50, 60, 85)
    assert result.overall_score == 63
    assert result.risk_level == RiskLevel.MEDIUM
    assert [s.signal for s in result.credibility_signals] == [
        "Missing EXIF Data",
        "Modification Detected",
        "Lighting Inconsistency",
    ]
    assert "metadata integrity concerns" in result.summary
    assert "visual inconsistencies" in result.summary
    assert "viral manipulation indicators" not in result.summary
    assert [r.action for r in result.recommendations][0] == "Verify Before Sharing"


def test_overall_score_invariant_holds(image_file):
    engine = AnalysisEngine(*static_providers(
        metadata=metadata_signals(exif_integrity=False, device_info=False),
        visual=visual_signals(edge_anomalies=True, noise_patterns=True, color_distribution=True),
        virality=virality_signals(suspicious_pattern=True, clickbait_elements=True, context_mismatch=True),
    ))
    result = asyncio.run(engine.analyze(image_file, "media_3"))

    m, v, r = result.metadata.score, result.visual.score, result.virality.score
    assert (m, v, r) == (65, 50, 30)
    assert result.overall_score == (35 * m + 40 * v + 25 * r + 50) // 100 == 50
    assert result.risk_level == RiskLevel.MEDIUM


def test_audio_skips_visual_provider(audio_file):
    """Audio never calls the visual provider and always scores visual 100."""
    visual = FailingProvider(Category.VISUAL)
    metadata, _, virality = static_providers()
    engine = AnalysisEngine(metadata, visual, virality)

    result = asyncio.run(engine.analyze(audio_file, "media_4"))

    assert visual.calls == 0
    assert result.visual.score == 100
    assert result.visual.details == (AUDIO_VISUAL_DETAIL,)


def test_provider_failure_fails_whole_analysis(image_file):
    metadata, visual, _ = static_providers()
    engine = AnalysisEngine(metadata, visual, FailingProvider(Category.VIRALITY, "timeout"))

    with pytest.raises(ProviderError) as exc_info:
        asyncio.run(engine.analyze(image_file, "media_5"))

    assert exc_info.value.category == "Virality"
    assert "timeout" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_malformed_signal_set_is_a_provider_failure(image_file):
    metadata, visual, virality = static_providers()
    engine = AnalysisEngine(RawDictProvider(Category.METADATA, {"has_exif": True}), visual, virality)

    with pytest.raises(ProviderError):
        asyncio.run(engine.analyze(image_file, "media_6"))


def test_plain_mapping_signal_set_is_accepted(image_file):
    metadata, visual, virality = static_providers()
    payload = metadata_signals(has_exif=False).model_dump()
    engine = AnalysisEngine(RawDictProvider(Category.METADATA, payload), visual, virality)

    result = asyncio.run(engine.analyze(image_file, "media_7"))
    assert result.metadata.score == 80


@pytest.mark.parametrize(
    "file_info",
    [
        {"content_type": "image/png", "size": 10, "last_modified": "2026-01-01T00:00:00Z"},
        {"name": "", "content_type": "image/png", "size": 10, "last_modified": "2026-01-01T00:00:00Z"},
        {"name": "a.png", "content_type": "image/png", "size": -1, "last_modified": "2026-01-01T00:00:00Z"},
        {"name": "a.png", "content_type": "image/png", "size": 10},
    ],
)
def test_invalid_file_info(clean_engine, file_info):
    with pytest.raises(InvalidInputError):
        asyncio.run(clean_engine.analyze(file_info, "media_8"))


def test_mapping_file_info_accepted(clean_engine):
    file_info = {"name": "a.png", "contentType": "image/png", "size": 10, "lastModified": "2026-01-01T00:00:00Z"}
    result = asyncio.run(clean_engine.analyze(file_info, "media_9"))
    assert result.overall_score == 100


@pytest.mark.parametrize("media_id", ["", "   ", None])
def test_invalid_media_id(clean_engine, image_file, media_id):
    with pytest.raises(InvalidInputError):
        asyncio.run(clean_engine.analyze(image_file, media_id))


def test_mismatched_provider_category_rejected():
    metadata, visual, virality = static_providers()
    with pytest.raises(ValueError):
        AnalysisEngine(visual, metadata, virality)


def test_results_are_independent(clean_engine, image_file):
    """Each run gets a fresh id and result; only id and timestamp differ."""
    first = asyncio.run(clean_engine.analyze(image_file, "media_10"))
    second = asyncio.run(clean_engine.analyze(image_file, "media_10"))

    assert first.id != second.id
    ignore = {"id", "timestamp"}
    assert first.model_dump(exclude=ignore) == second.model_dump(exclude=ignore)


def test_evaluate_is_deterministic():
    args = (
        metadata_signals(has_exif=False, timestamp_consistency=False),
        visual_signals(edge_anomalies=True),
        virality_signals(emotional_manipulation=True),
    )
    first = evaluate(*args)
    second = evaluate(*args)

    assert first == second
    assert first.summary == second.summary
    assert [s.model_dump_json() for s in first.credibility_signals] == [
        s.model_dump_json() for s in second.credibility_signals
    ]


def test_evaluate_requires_visual_signals_for_images():
    with pytest.raises(InvalidInputError):
        evaluate(metadata_signals(), None, virality_signals(), MediaType.VIDEO)


def test_result_serializes_with_camel_case_keys(clean_engine, image_file):
    result = asyncio.run(clean_engine.analyze(image_file, "media_11"))
    data = result.model_dump(mode="json", by_alias=True)

    assert data["mediaId"] == "media_11"
    assert data["overallScore"] == 100
    assert data["riskLevel"] == "low"
    assert data["credibilitySignals"] == []
    assert data["metadata"]["signals"]["hasExif"] is True


def test_analyze_media_uses_default_engine(monkeypatch, clean_engine, image_file):
    import verishield.engine as engine_module

    monkeypatch.setattr(engine_module, "_default_engine", clean_engine)
    result = asyncio.run(engine_module.analyze_media(image_file, "media_12"))
    assert result.overall_score == 100


def test_default_engine_uses_heuristic_providers(monkeypatch):
    import verishield.engine as engine_module
    from verishield.providers import MetadataHeuristicProvider, ViralityHeuristicProvider

    monkeypatch.setattr(engine_module, "_default_engine", None)
    engine = engine_module.get_default_engine()

    assert isinstance(engine.metadata_provider, MetadataHeuristicProvider)
    assert isinstance(engine.virality_provider, ViralityHeuristicProvider)
    assert engine_module.get_default_engine() is engine


@pytest.mark.parametrize(
    "error",
    [InvalidInputError("exif block unreadable"), VeriShieldError("boom")],
)
def test_engine_errors_from_providers_become_provider_failures(image_file, error):
    """A provider raising one of the engine's own errors is still a provider failure."""
    metadata, visual, _ = static_providers()
    engine = AnalysisEngine(metadata, visual, RaisingProvider(Category.VIRALITY, error))

    with pytest.raises(ProviderError) as exc_info:
        asyncio.run(engine.analyze(image_file, "media_13"))

    assert exc_info.value.category == "Virality"
    assert exc_info.value.__cause__ is error


def test_provider_error_passes_through_unchanged(image_file):
    error = ProviderError("Metadata", "exif reader offline")
    _, visual, virality = static_providers()
    engine = AnalysisEngine(RaisingProvider(Category.METADATA, error), visual, virality)

    with pytest.raises(ProviderError) as exc_info:
        asyncio.run(engine.analyze(image_file, "media_14"))

    assert exc_info.value is error


def test_analysis_latency_sleeps_once_before_providers(monkeypatch, image_file):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("verishield.engine.asyncio.sleep", fake_sleep)
    engine = AnalysisEngine(*static_providers(), latency=2.0)
    asyncio.run(engine.analyze(image_file, "media_15"))

    assert delays == [2.0]


def test_default_engine_latency_follows_scale(monkeypatch):
    import verishield.engine as engine_module
    from verishield import config

    monkeypatch.setattr(engine_module, "_default_engine", None)
    monkeypatch.setattr(config, "SIMULATED_LATENCY", 0.5)
    engine = engine_module.get_default_engine()

    assert engine.latency == config.ANALYSIS_LATENCY * 0.5
    assert engine.metadata_provider.latency == config.PROVIDER_LATENCY["metadata"] * 0.5
