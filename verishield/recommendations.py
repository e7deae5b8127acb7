"""
Recommendation Generator
Maps a risk level to the ordered list of recommended actions.
"""

from .models import CredibilitySignal, ResponseRecommendation, RiskLevel, Severity

# (action, priority, description, icon) per risk level, in display order
RECOMMENDATIONS = {
    RiskLevel.HIGH: [
        ("Do Not Share", Severity.HIGH,
         "High credibility risk detected. Avoid sharing until verified.", "🚫"),
        ("Verify Source", Severity.HIGH,
         "Cross-reference with trusted news sources and fact-checkers.", "🔍"),
        ("Report Content", Severity.MEDIUM,
         "Consider reporting to platform moderators if spreading misinformation.", "⚠️"),
    ],
    RiskLevel.MEDIUM: [
        ("Verify Before Sharing", Severity.MEDIUM,
         "Exercise caution. Verify through multiple sources before sharing.", "⚡"),
        ("Check Original Source", Severity.MEDIUM,
         "Attempt to locate and verify the original source of this media.", "📍"),
        ("Add Context Warning", Severity.LOW,
         "If sharing, add disclaimer about unverified credibility.", "💬"),
    ],
    RiskLevel.LOW: [
        ("Low Risk Detected", Severity.LOW,
         "Media appears credible, but always verify important claims.", "✅"),
        ("Standard Verification", Severity.LOW,
         "Apply normal fact-checking practices for important content.", "📋"),
    ]
}


def generate_recommendations(
    risk_level: RiskLevel,
    signals: tuple[CredibilitySignal, ...] = ()
) -> tuple[ResponseRecommendation, ...]:
    """
    Build recommendations for a risk level.

    `signals` is accepted so callers can pass the extracted findings, but the
    output currently depends on the risk level alone.
    """
    return tuple(
        ResponseRecommendation(action=action, priority=priority, description=description, icon=icon)
        for action, priority, description, icon in RECOMMENDATIONS[RiskLevel(risk_level)]
    )
