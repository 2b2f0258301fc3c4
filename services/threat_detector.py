from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from models.schemas import EmailContent, ParsedSignals
from models.threat import EventType, ThreatAnalysis, ThreatLevel, ThreatMetadata
from services.attachment_checks import analyze_attachments
from services.keyword_rules import DEFAULT_KEYWORD_RULES, KeywordRules
from services.preprocess import parse_email
from services.sender_checks import analyze_sender
from services.url_checks import analyze_urls


CATEGORY_MULTIPLIERS = {
    "phishing": 2.0,
    "spam": 1.0,
    "malware": 2.5,
    "social_engineering": 1.5,
}

# Dominant event type precedence. A later category only takes over on a strictly
# greater weighted subscore, so ties go to the category listed first.
EVENT_PRECEDENCE: Tuple[Tuple[str, EventType], ...] = (
    ("phishing", EventType.PHISHING),
    ("spam", EventType.SPAM),
    ("malware", EventType.MALWARE),
    ("social_engineering", EventType.SOCIAL_ENGINEERING),
)
DEFAULT_EVENT_TYPE = EventType.SPAM

PATTERN_POINTS = 3
CONFIDENCE_SCALE = 15.0

LEVEL_THRESHOLDS = (
    (15, ThreatLevel.CRITICAL),
    (10, ThreatLevel.HIGH),
    (6, ThreatLevel.MEDIUM),
    (3, ThreatLevel.LOW),
)


def threat_level_for_score(score: float) -> ThreatLevel:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return ThreatLevel.SAFE


def confidence_for_score(score: float) -> float:
    return max(0.0, min(score / CONFIDENCE_SCALE, 1.0))


def _category_reason(category: str, count: int, weighted: float) -> str:
    if category == "phishing":
        return f"Phishing indicators found ({count} keywords, score: {weighted:g})"
    if category == "spam":
        return f"Spam indicators found ({count} keywords)"
    if category == "malware":
        return f"Malware indicators found ({count} keywords, score: {weighted:g})"
    return f"Social engineering tactics detected ({count} keywords, score: {weighted:g})"


def match_keywords(text: str, keywords: Sequence[str], category: str) -> List[str]:
    matches: List[str] = []
    seen = set()
    for keyword in keywords:
        k = str(keyword).lower()
        if not k or k in seen:
            continue
        seen.add(k)
        if k in text:
            matches.append(f"[{category}] {keyword}")
    return matches


class ThreatDetector:
    """Rule-based scorer turning one email and its parsed signals into a ThreatAnalysis.

    The detector holds only its immutable keyword rules, so a single instance can be
    shared across threads. Nothing here logs; callers attach observability through
    ``utils.logger.log_threat_analysis`` after ``analyze`` returns.
    """

    def __init__(self, rules: KeywordRules = DEFAULT_KEYWORD_RULES):
        self.rules = rules

    def analyze(self, email: EmailContent, signals: Optional[ParsedSignals] = None) -> ThreatAnalysis:
        if signals is None:
            signals = parse_email(email)

        text = f"{email.subject or ''} {signals.plain_text or ''}".lower()
        urls = tuple(signals.urls or ())
        domains = tuple(signals.domains or ())
        patterns = tuple(signals.suspicious_patterns or ())
        attachments = tuple(email.attachments or ())

        total = 0.0
        detected: List[str] = []
        reasons: List[str] = []
        weighted: Dict[str, float] = {}

        for category, keywords in self.rules.items():
            matches = match_keywords(text, keywords, category)
            weighted[category] = len(matches) * CATEGORY_MULTIPLIERS[category]
            total += weighted[category]
            detected.extend(matches)
            if matches:
                reasons.append(_category_reason(category, len(matches), weighted[category]))

        if patterns:
            total += len(patterns) * PATTERN_POINTS
            reasons.append(f"Suspicious patterns: {', '.join(patterns)}")

        for result in (
            analyze_urls(urls, domains),
            analyze_sender(email.from_address),
            analyze_attachments(attachments),
        ):
            total += result["score"]
            reasons.extend(result["reasons"])

        event_type = DEFAULT_EVENT_TYPE
        best = 0.0
        for category, candidate in EVENT_PRECEDENCE:
            if weighted.get(category, 0.0) > best:
                best = weighted[category]
                event_type = candidate

        level = threat_level_for_score(total)
        return ThreatAnalysis(
            is_malicious=level >= ThreatLevel.MEDIUM,
            threat_level=level,
            event_type=event_type,
            confidence=confidence_for_score(total),
            score=total,
            detected_keywords=tuple(dict.fromkeys(detected)),
            detected_patterns=patterns,
            reasons=tuple(reasons),
            metadata=ThreatMetadata(
                suspicious_urls=urls,
                suspicious_domains=domains,
                has_attachments=len(attachments) > 0,
            ),
        )

    def analyze_batch(
        self,
        emails: Sequence[EmailContent],
        signals: Optional[Sequence[Optional[ParsedSignals]]] = None,
        max_workers: Optional[int] = None,
    ) -> List[ThreatAnalysis]:
        signals = list(signals) if signals is not None else [None] * len(emails)
        if len(signals) != len(emails):
            raise ValueError("signals must line up with emails")

        if not max_workers or max_workers <= 1 or len(emails) <= 1:
            return [self.analyze(e, s) for e, s in zip(emails, signals)]

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.analyze, emails, signals))
