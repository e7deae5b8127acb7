"""
Summary Generator
Writes the one-sentence natural-language verdict for an analysis.
"""

from .config import SUMMARY_ISSUE_THRESHOLD
from .models import RiskLevel

LOW_RISK_SUMMARY = (
    "Media shows low credibility risk based on our multi-signal heuristic analysis. "
    "Standard verification practices still recommended."
)


def collect_issues(metadata_score: int, visual_score: int, virality_score: int) -> list:
    """Name each category scoring under the issue threshold, in fixed order."""
    issues = []
    if metadata_score < SUMMARY_ISSUE_THRESHOLD:
        issues.append("metadata integrity concerns")
    if visual_score < SUMMARY_ISSUE_THRESHOLD:
        issues.append("visual inconsistencies")
    if virality_score < SUMMARY_ISSUE_THRESHOLD:
        issues.append("viral manipulation indicators")
    return issues


def generate_summary(risk_level: RiskLevel, metadata_score: int, visual_score: int, virality_score: int) -> str:
    """Generate the human-readable summary for a risk level."""
    issues = ", ".join(collect_issues(metadata_score, visual_score, virality_score))
    risk_level = RiskLevel(risk_level)

    if risk_level == RiskLevel.HIGH:
        return (
            f"High credibility risk detected with {issues}. We recommend not sharing "
            "this media without thorough verification from trusted sources."
        )
    if risk_level == RiskLevel.MEDIUM:
        return (
            f"Moderate credibility concerns identified, including {issues}. Verify "
            "through multiple independent sources before sharing."
        )
    # Low risk reads the same even if one category scored under the threshold
    return LOW_RISK_SUMMARY
