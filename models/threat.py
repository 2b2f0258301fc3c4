from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Tuple


class ThreatLevel(IntEnum):
    SAFE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class EventType(IntEnum):
    PHISHING = 0
    SPAM = 1
    MALWARE = 2
    SOCIAL_ENGINEERING = 3


@dataclass(frozen=True)
class ThreatMetadata:
    suspicious_urls: Tuple[str, ...] = field(default_factory=tuple)
    suspicious_domains: Tuple[str, ...] = field(default_factory=tuple)
    has_attachments: bool = False


@dataclass(frozen=True)
class ThreatAnalysis:
    is_malicious: bool
    threat_level: ThreatLevel
    event_type: EventType
    confidence: float
    score: float
    detected_keywords: Tuple[str, ...] = field(default_factory=tuple)
    detected_patterns: Tuple[str, ...] = field(default_factory=tuple)
    reasons: Tuple[str, ...] = field(default_factory=tuple)
    metadata: ThreatMetadata = field(default_factory=ThreatMetadata)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_malicious": self.is_malicious,
            "threat_level": self.threat_level.name.lower(),
            "event_type": self.event_type.name.lower(),
            "confidence": round(self.confidence, 4),
            "score": self.score,
            "detected_keywords": list(self.detected_keywords),
            "detected_patterns": list(self.detected_patterns),
            "reasons": list(self.reasons),
            "metadata": {
                "suspicious_urls": list(self.metadata.suspicious_urls),
                "suspicious_domains": list(self.metadata.suspicious_domains),
                "has_attachments": self.metadata.has_attachments,
            },
        }


@dataclass(frozen=True)
class ThreatReport:
    score: float
    normalized_score: int
    level: ThreatLevel
    description: str
    actions: Tuple[str, ...]
    details: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": round(self.score, 2),
            "normalized_score": self.normalized_score,
            "level": self.level.name.lower(),
            "description": self.description,
            "actions": list(self.actions),
            "details": list(self.details),
        }
