"""
Signal Providers
One provider per category turns file info into that category's boolean
signal set. The engine only depends on the SignalProvider interface, so the
placeholder heuristics here can be swapped for real detectors.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

import numpy as np

from . import config
from .models import (
    Category,
    FileInfo,
    MediaType,
    MetadataSignals,
    ViralitySignals,
    VisualSignals,
)

logger = logging.getLogger(__name__)

SIGNAL_TYPES = {
    Category.METADATA: MetadataSignals,
    Category.VISUAL: VisualSignals,
    Category.VIRALITY: ViralitySignals
}

# File name keywords associated with emotionally charged sharing
EMOTIONAL_KEYWORDS = ["shocking", "urgent", "breaking", "must", "viral"]

# Files last modified longer ago than this fail the timestamp check
TIMESTAMP_MAX_AGE_DAYS = 365


class SignalProvider(ABC):
    """Produces the signal set for one category."""

    category: Category

    @abstractmethod
    async def detect(self, file_info: FileInfo, media_type: MediaType):
        """Return the category's signal set for a file."""
        raise NotImplementedError


class StaticSignalProvider(SignalProvider):
    """Always returns the same signal set. Deterministic stand-in for tests and demos."""

    def __init__(self, category: Category, signals):
        expected = SIGNAL_TYPES[Category(category)]
        if not isinstance(signals, expected):
            signals = expected.model_validate(signals)
        self.category = Category(category)
        self.signals = signals

    async def detect(self, file_info: FileInfo, media_type: MediaType):
        return self.signals


class HeuristicProvider(SignalProvider):
    """
    Base for the placeholder heuristic providers.

    Randomness comes only from the injected generator so that runs are
    reproducible when it is seeded.
    """

    def __init__(self, rng: np.random.Generator = None, latency: float = 0.0):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.latency = latency

    def chance(self, threshold: float) -> bool:
        """True when a uniform draw lands above the threshold."""
        return bool(self.rng.random() > threshold)

    async def detect(self, file_info: FileInfo, media_type: MediaType):
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        signals = self.check(file_info, media_type)
        logger.debug(f"{self.category.value} signals for {file_info.name}: {signals.model_dump()}")
        return signals

    @abstractmethod
    def check(self, file_info: FileInfo, media_type: MediaType):
        raise NotImplementedError


class MetadataHeuristicProvider(HeuristicProvider):
    category = Category.METADATA

    def __init__(self, rng: np.random.Generator = None, latency: float = 0.0, clock=None):
        super().__init__(rng, latency)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _days_since_modified(self, file_info: FileInfo) -> float:
        modified = file_info.last_modified
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        return (self.clock() - modified).total_seconds() / 86400

    def check(self, file_info: FileInfo, media_type: MediaType) -> MetadataSignals:
        # Real implementation would parse actual EXIF data
        has_exif = self.chance(0.4)
        exif_integrity = self.chance(0.3)
        timestamp_consistency = self._days_since_modified(file_info) < TIMESTAMP_MAX_AGE_DAYS and self.chance(0.25)
        geolocation_present = self.chance(0.6)
        device_info = self.chance(0.5)
        # Perfect KB alignment is suspicious
        modification_detected = file_info.size % 1024 == 0 and self.chance(0.7)

        return MetadataSignals(
            has_exif=has_exif,
            exif_integrity=exif_integrity,
            timestamp_consistency=timestamp_consistency,
            geolocation_present=geolocation_present,
            device_info=device_info,
            modification_detected=modification_detected
        )


class VisualHeuristicProvider(HeuristicProvider):
    category = Category.VISUAL

    def check(self, file_info: FileInfo, media_type: MediaType) -> VisualSignals:
        return VisualSignals(
            compression_artifacts=self.chance(0.7),
            inconsistent_lighting=self.chance(0.75),
            unrealistic_shadows=self.chance(0.8),
            edge_anomalies=self.chance(0.7),
            color_distribution=self.chance(0.8),
            noise_patterns=self.chance(0.75)
        )


class ViralityHeuristicProvider(HeuristicProvider):
    category = Category.VIRALITY

    def check(self, file_info: FileInfo, media_type: MediaType) -> ViralitySignals:
        name = file_info.name.lower()
        return ViralitySignals(
            suspicious_pattern=self.chance(0.65),
            emotional_manipulation=any(kw in name for kw in EMOTIONAL_KEYWORDS),
            urgency_indicators="urgent" in name or self.chance(0.7),
            clickbait_elements=self.chance(0.75),
            context_mismatch=self.chance(0.8)
        )


def build_default_providers(seed: int = None, latency_scale: float = None) -> tuple:
    """
    Build the three heuristic providers.

    Each gets its own generator spawned from one seed sequence, so a fixed
    seed reproduces the whole run.
    """
    seed = config.RANDOM_SEED if seed is None else seed
    latency_scale = config.SIMULATED_LATENCY if latency_scale is None else latency_scale

    metadata_seq, visual_seq, virality_seq = np.random.SeedSequence(seed).spawn(3)
    logger.info(f"Heuristic providers ready (seed={seed}, latency scale={latency_scale})")

    return (
        MetadataHeuristicProvider(
            np.random.default_rng(metadata_seq), config.PROVIDER_LATENCY["metadata"] * latency_scale
        ),
        VisualHeuristicProvider(
            np.random.default_rng(visual_seq), config.PROVIDER_LATENCY["visual"] * latency_scale
        ),
        ViralityHeuristicProvider(
            np.random.default_rng(virality_seq), config.PROVIDER_LATENCY["virality"] * latency_scale
        )
    )
