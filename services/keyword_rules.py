import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Tuple


PHISHING_KEYWORDS = (
    "verify your account",
    "verify your identity",
    "confirm your identity",
    "account has been suspended",
    "suspended account",
    "click here immediately",
    "urgent action required",
    "unusual activity",
    "security alert",
    "verify payment",
    "update your payment",
    "login attempt",
)
SPAM_KEYWORDS = (
    "limited time offer",
    "act now",
    "winner",
    "congratulations",
    "free money",
    "no credit check",
    "earn money fast",
    "unsubscribe",
    "100% free",
)
MALWARE_KEYWORDS = (
    "download attachment",
    "enable macros",
    "enable content",
    "run this file",
    "install software",
    "execute",
    ".exe",
    ".scr",
)
SOCIAL_ENGINEERING_KEYWORDS = (
    "ceo request",
    "urgent wire transfer",
    "wire transfer",
    "gift card",
    "confidential",
    "do not share",
    "password reset",
    "keep this between us",
)

# ordered by dominant event type precedence
CATEGORIES = ("phishing", "spam", "malware", "social_engineering")


@dataclass(frozen=True)
class KeywordRules:
    phishing: Tuple[str, ...] = PHISHING_KEYWORDS
    spam: Tuple[str, ...] = SPAM_KEYWORDS
    malware: Tuple[str, ...] = MALWARE_KEYWORDS
    social_engineering: Tuple[str, ...] = SOCIAL_ENGINEERING_KEYWORDS

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        for category in CATEGORIES:
            yield category, getattr(self, category)


DEFAULT_KEYWORD_RULES = KeywordRules()


def rules_from_dict(raw: Dict) -> KeywordRules:
    overrides = {}
    for category in CATEGORIES:
        words = raw.get(category)
        if isinstance(words, list):
            overrides[category] = tuple(str(w) for w in words if str(w).strip())
    return KeywordRules(**overrides)


def load_keyword_rules(path: str = "") -> KeywordRules:
    if not path:
        return DEFAULT_KEYWORD_RULES

    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Keyword rules file must contain a JSON object: {path}")
    return rules_from_dict(raw)
