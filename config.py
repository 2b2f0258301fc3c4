import os
from dataclasses import dataclass, field
from typing import Dict


WEIGHT_ENV_VARS = {
    "keyword_matches": "WEIGHT_KEYWORD_MATCHES",
    "suspicious_patterns": "WEIGHT_SUSPICIOUS_PATTERNS",
    "url_analysis": "WEIGHT_URL_ANALYSIS",
    "attachment_risk": "WEIGHT_ATTACHMENT_RISK",
    "sender_reputation": "WEIGHT_SENDER_REPUTATION",
}


def _weight_overrides() -> Dict[str, float]:
    return {name: float(os.environ[var]) for name, var in WEIGHT_ENV_VARS.items() if os.getenv(var)}


@dataclass
class Config:
    HOST: str = os.getenv("FLASK_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    DEBUG: bool = os.getenv("FLASK_DEBUG", "true").lower() == "true"
    MAX_TEXT_CHARS: int = int(os.getenv("MAX_TEXT_CHARS", "20000"))
    KEYWORD_RULES_PATH: str = os.getenv("KEYWORD_RULES_PATH", "")
    BATCH_WORKERS: int = int(os.getenv("BATCH_WORKERS", "4"))
    WEIGHT_OVERRIDES: Dict[str, float] = field(default_factory=_weight_overrides)


config = Config()
