import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from models.threat import ThreatAnalysis, ThreatLevel, ThreatReport


@dataclass(frozen=True)
class ScoringWeights:
    keyword_matches: float = 1.0
    suspicious_patterns: float = 1.5
    url_analysis: float = 2.0
    attachment_risk: float = 2.5
    sender_reputation: float = 1.2


DEFAULT_WEIGHTS = ScoringWeights()
WEIGHT_FIELDS = tuple(f.name for f in fields(ScoringWeights))

NEUTRAL_SENDER = 0.5
SENDER_SCALE = 5
NORMALIZE_DIVISOR = 20

THREAT_DESCRIPTIONS = {
    ThreatLevel.SAFE: "This email appears safe with no significant threats detected.",
    ThreatLevel.LOW: "Minor suspicious indicators detected. Exercise caution.",
    ThreatLevel.MEDIUM: "Moderate threat detected. Verify sender before taking action.",
    ThreatLevel.HIGH: "High threat level. This email shows multiple red flags.",
    ThreatLevel.CRITICAL: "CRITICAL THREAT. This email is highly likely to be malicious. Do not interact.",
}

RECOMMENDED_ACTIONS = {
    ThreatLevel.SAFE: ("Email appears safe to read",),
    ThreatLevel.LOW: (
        "Verify sender identity",
        "Avoid clicking unknown links",
        "Report if suspicious",
    ),
    ThreatLevel.MEDIUM: (
        "Do not click any links",
        "Do not download attachments",
        "Verify sender through alternative channel",
        "Report to IT department",
    ),
    ThreatLevel.HIGH: (
        "DO NOT interact with this email",
        "Do not reply or forward",
        "Report immediately to authorities",
        "Delete after reporting",
    ),
    ThreatLevel.CRITICAL: (
        "IMMEDIATE ACTION REQUIRED",
        "Do not open any attachments",
        "Do not click any links",
        "Report to college IT security immediately",
        "Consider changing passwords if you interacted",
        "Delete permanently after reporting",
    ),
}


def _validated_weights(values: Mapping[str, Any]) -> Dict[str, float]:
    out: Dict[str, float] = {}
    for name, value in values.items():
        if name not in WEIGHT_FIELDS:
            raise ValueError(f"Unknown scoring weight: {name}")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Scoring weight {name} must be a positive number")
        out[name] = float(value)
    return out


class ThreatScorer:
    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.weights = weights

    def calculate_weighted_score(self, analysis: ThreatAnalysis, sender_score: float = NEUTRAL_SENDER) -> float:
        """Re-weight a verdict; ``sender_score`` is the sender's reputation as a 0-1 fraction."""
        w = self.weights
        score = len(analysis.detected_keywords) * w.keyword_matches
        score += len(analysis.detected_patterns) * w.suspicious_patterns
        score += len(analysis.metadata.suspicious_urls) * w.url_analysis
        if analysis.metadata.has_attachments:
            score += w.attachment_risk
        # lower reputation means more threat
        score += (1 - sender_score) * w.sender_reputation * SENDER_SCALE
        return score

    def normalize_score(self, raw_score: float) -> int:
        scaled = min(raw_score / NORMALIZE_DIVISOR * 100, 100)
        return max(0, int(math.floor(scaled + 0.5)))

    def get_threat_description(self, level: ThreatLevel) -> str:
        return THREAT_DESCRIPTIONS.get(level, "Unknown threat level")

    def get_recommended_actions(self, level: ThreatLevel) -> List[str]:
        return list(RECOMMENDED_ACTIONS.get(level, ()))

    def generate_report(self, analysis: ThreatAnalysis, sender_score: float = NEUTRAL_SENDER) -> ThreatReport:
        raw = self.calculate_weighted_score(analysis, sender_score)
        return ThreatReport(
            score=raw,
            normalized_score=self.normalize_score(raw),
            level=analysis.threat_level,
            description=self.get_threat_description(analysis.threat_level),
            actions=tuple(self.get_recommended_actions(analysis.threat_level)),
            details=(
                f"Confidence: {analysis.confidence * 100:.1f}%",
                f"Keywords detected: {len(analysis.detected_keywords)}",
                f"Suspicious patterns: {len(analysis.detected_patterns)}",
                f"Suspicious URLs: {len(analysis.metadata.suspicious_urls)}",
                f"Has attachments: {'Yes' if analysis.metadata.has_attachments else 'No'}",
            ),
        )

    @staticmethod
    def compare_threat(a: ThreatAnalysis, b: ThreatAnalysis) -> float:
        return b.score - a.score

    def update_weights(self, new_weights: Optional[Mapping[str, Any]] = None, **overrides: Any) -> ScoringWeights:
        merged = dict(new_weights or {})
        merged.update(overrides)
        self.weights = replace(self.weights, **_validated_weights(merged))
        return self.weights
