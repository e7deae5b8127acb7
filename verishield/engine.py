"""
VeriShield Heuristic Analysis Engine
Runs the three category providers, then scores, fuses and explains the
result as one immutable AnalysisResult.
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import NamedTuple

from pydantic import ValidationError

from . import config
from .exceptions import InvalidInputError, ProviderError
from .fusion import fuse
from .models import (
    AnalysisResult,
    Category,
    CredibilitySignal,
    FileInfo,
    MediaType,
    MetadataAnalysis,
    MetadataSignals,
    ResponseRecommendation,
    RiskLevel,
    ViralityAnalysis,
    ViralitySignals,
    VisualAnalysis,
    VisualSignals,
)
from .providers import SIGNAL_TYPES, SignalProvider, build_default_providers
from .recommendations import generate_recommendations
from .scoring import not_applicable_visual, score_metadata, score_virality, score_visual
from .signals import extract_credibility_signals
from .summary import generate_summary

logger = logging.getLogger(__name__)


class Evaluation(NamedTuple):
    """Everything downstream of the providers; fully determined by the signal sets."""
    metadata: MetadataAnalysis
    visual: VisualAnalysis
    virality: ViralityAnalysis
    overall_score: int
    risk_level: RiskLevel
    credibility_signals: tuple[CredibilitySignal, ...]
    recommendations: tuple[ResponseRecommendation, ...]
    summary: str


def detect_media_type(content_type: str) -> MediaType:
    """Media type from the declared content type. Unrecognized types fall back to image."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return MediaType.IMAGE
    if content_type.startswith("video/"):
        return MediaType.VIDEO
    if content_type.startswith("audio/"):
        return MediaType.AUDIO
    logger.debug(f"Unrecognized content type {content_type!r}, treating as image")
    return MediaType.IMAGE


def generate_analysis_id() -> str:
    return f"analysis_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def evaluate(
    metadata_signals: MetadataSignals,
    visual_signals: VisualSignals,
    virality_signals: ViralitySignals,
    media_type: MediaType = MediaType.IMAGE
) -> Evaluation:
    """
    Score, fuse and explain three signal sets.

    For audio the visual signals are ignored (and may be None) and the fixed
    not-applicable visual result is used instead.
    """
    metadata = score_metadata(metadata_signals)
    if media_type == MediaType.AUDIO:
        visual = not_applicable_visual()
    elif visual_signals is None:
        raise InvalidInputError(f"Visual signals are required for {MediaType(media_type).value} media")
    else:
        visual = score_visual(visual_signals)
    virality = score_virality(virality_signals)

    # Risk fusion
    overall_score, risk_level = fuse(metadata.score, visual.score, virality.score)

    credibility_signals = extract_credibility_signals(metadata, visual, virality)
    recommendations = generate_recommendations(risk_level, credibility_signals)
    summary = generate_summary(risk_level, metadata.score, visual.score, virality.score)

    return Evaluation(
        metadata=metadata,
        visual=visual,
        virality=virality,
        overall_score=overall_score,
        risk_level=risk_level,
        credibility_signals=credibility_signals,
        recommendations=recommendations,
        summary=summary
    )


class AnalysisEngine:
    """
    Orchestrates one analysis per call. Holds providers only; no per-analysis
    state survives a call.
    """

    def __init__(
        self,
        metadata_provider: SignalProvider = None,
        visual_provider: SignalProvider = None,
        virality_provider: SignalProvider = None,
        latency: float = 0.0
    ):
        if metadata_provider is None or visual_provider is None or virality_provider is None:
            defaults = build_default_providers()
            metadata_provider = metadata_provider or defaults[0]
            visual_provider = visual_provider or defaults[1]
            virality_provider = virality_provider or defaults[2]

        for provider, category in (
            (metadata_provider, Category.METADATA),
            (visual_provider, Category.VISUAL),
            (virality_provider, Category.VIRALITY)
        ):
            if provider.category != category:
                raise ValueError(f"Expected a {category.value} provider, got {provider.category}")

        self.metadata_provider = metadata_provider
        self.visual_provider = visual_provider
        self.virality_provider = virality_provider
        self.latency = latency

    async def _run_provider(self, provider: SignalProvider, file_info: FileInfo, media_type: MediaType):
        category = provider.category
        try:
            signals = await provider.detect(file_info, media_type)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"{category.value} provider failed on {file_info.name}: {e}")
            raise ProviderError(category.value, str(e)) from e

        expected = SIGNAL_TYPES[category]
        if isinstance(signals, expected):
            return signals
        try:
            return expected.model_validate(signals)
        except ValidationError as e:
            raise ProviderError(category.value, f"returned a malformed signal set: {e}") from e

    async def analyze(self, file_info, media_id: str) -> AnalysisResult:
        """Run a full analysis of one file. Any provider failure fails the whole call."""
        try:
            file_info = file_info if isinstance(file_info, FileInfo) else FileInfo.model_validate(file_info)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid file info: {e}") from e
        if not isinstance(media_id, str) or not media_id.strip():
            raise InvalidInputError("media_id must be a non-empty string")

        analysis_id = generate_analysis_id()
        media_type = detect_media_type(file_info.content_type)
        logger.info(f"[{analysis_id}] Analyzing {file_info.name} ({media_type.value}, {file_info.size} bytes)")

        providers = [self.metadata_provider, self.visual_provider, self.virality_provider]
        if media_type == MediaType.AUDIO:
            # Visual heuristics don't apply to audio
            providers.remove(self.visual_provider)

        if self.latency > 0:
            await asyncio.sleep(self.latency)

        # Fan out, then wait for every category
        results = await asyncio.gather(
            *(self._run_provider(p, file_info, media_type) for p in providers)
        )
        signals = {p.category: result for p, result in zip(providers, results)}

        evaluation = evaluate(
            signals[Category.METADATA],
            signals.get(Category.VISUAL),
            signals[Category.VIRALITY],
            media_type
        )

        result = AnalysisResult(
            id=analysis_id,
            media_id=media_id,
            timestamp=datetime.now(timezone.utc),
            **evaluation._asdict()
        )
        logger.info(
            f"[{analysis_id}] Analysis complete | Score: {result.overall_score} | "
            f"Risk: {result.risk_level.value} | Signals: {len(result.credibility_signals)}"
        )
        return result


_default_engine = None


def get_default_engine() -> AnalysisEngine:
    """Engine backed by the heuristic providers, built on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AnalysisEngine(latency=config.ANALYSIS_LATENCY * config.SIMULATED_LATENCY)
    return _default_engine


async def analyze_media(file_info, media_id: str) -> AnalysisResult:
    """Analyze a file with the default engine."""
    return await get_default_engine().analyze(file_info, media_id)
