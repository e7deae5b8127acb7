"""
Risk Fusion Engine
Combines the three category sub-scores into a weighted overall score
and maps it to a risk level.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from .config import (
    FUSION_WEIGHTS,
    LOW_RISK_THRESHOLD,
    MAX_SCORE,
    MEDIUM_RISK_THRESHOLD,
    MIN_SCORE,
)
from .exceptions import InvalidInputError, InvariantViolationError
from .models import RiskLevel

logger = logging.getLogger(__name__)


def validate_fusion_weights(weights: dict) -> bool:
    """Weights must cover every category, be non-negative and sum to exactly 1."""
    if set(weights) != {"metadata", "visual", "virality"}:
        logger.error(f"Fusion weights must cover metadata, visual and virality, got: {sorted(weights)}")
        return False

    if not all(w >= 0 for w in weights.values()):
        logger.error("All fusion weights must be non-negative.")
        return False

    total = sum(Decimal(str(w)) for w in weights.values())
    if total != Decimal("1"):
        logger.error(f"Fusion weights must sum to 1.0, got {total}")
        return False

    return True


if not validate_fusion_weights(FUSION_WEIGHTS):
    raise InvariantViolationError("Invalid fusion weights configured.")

# Decimal weights keep round-half-up exact (0.35 * 50 == 17.5, not 17.4999...)
WEIGHTS = {k: Decimal(str(v)) for k, v in FUSION_WEIGHTS.items()}


def _check_score(name: str, score) -> None:
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidInputError(f"{name} score must be an integer, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidInputError(f"{name} score must be within [{MIN_SCORE}, {MAX_SCORE}], got {score}")


def compute_overall_score(metadata_score: int, visual_score: int, virality_score: int) -> int:
    """Weighted sum of the category scores, rounded half-up to an integer."""
    _check_score("metadata", metadata_score)
    _check_score("visual", visual_score)
    _check_score("virality", virality_score)

    weighted = (
        metadata_score * WEIGHTS["metadata"]
        + visual_score * WEIGHTS["visual"]
        + virality_score * WEIGHTS["virality"]
    )
    overall = int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    if not MIN_SCORE <= overall <= MAX_SCORE:
        raise InvariantViolationError(f"Fused score {overall} outside [{MIN_SCORE}, {MAX_SCORE}]")

    return overall


def determine_risk_level(score: int) -> RiskLevel:
    """Map an overall score to a risk level."""
    if score >= LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def fuse(metadata_score: int, visual_score: int, virality_score: int) -> tuple[int, RiskLevel]:
    """Return (overall_score, risk_level) for the three category scores."""
    overall = compute_overall_score(metadata_score, visual_score, virality_score)
    risk_level = determine_risk_level(overall)
    logger.debug(
        f"Fused metadata={metadata_score} visual={visual_score} virality={virality_score} "
        f"-> {overall} ({risk_level.value})"
    )
    return overall, risk_level
