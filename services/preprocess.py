import re
from typing import Iterable, List
from urllib.parse import urlparse

from models.schemas import EmailContent, ParsedSignals


URGENT_TERMS = (
    "urgent",
    "immediate",
    "act now",
    "expires",
    "limited time",
    "hurry",
    "quick",
    "asap",
)
MONEY_TERMS = (
    "wire transfer",
    "send money",
    "payment",
    "bank account",
    "credit card",
    "paypal",
    "venmo",
    "bitcoin",
    "cryptocurrency",
)

URL_RE = re.compile(r"https?://[^\s]+")
BASE64_RE = re.compile(r"[A-Za-z0-9+/]{40,}={0,2}")
PUNCTUATION_RE = re.compile(r"[!?]{3,}")
ZERO_WIDTH_SPACE = "\u200b"
CAPS_RATIO = 0.3
CAPS_MIN_LENGTH = 20


def dedupe_urls(urls: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for url in urls:
        u = (url or "").strip()
        if u and u not in seen:
            seen.add(u)
            out.append(u)
    return out


def extract_urls(text: str) -> List[str]:
    return dedupe_urls(URL_RE.findall(text or ""))


def extract_domains(urls: Iterable[str]) -> List[str]:
    domains = []
    for url in urls:
        try:
            hostname = urlparse(url).hostname
        except ValueError:
            continue
        if hostname and hostname not in domains:
            domains.append(hostname)
    return domains


def detect_suspicious_patterns(text: str) -> List[str]:
    text = text or ""
    patterns: List[str] = []

    if "<!--" in text or ZERO_WIDTH_SPACE in text:
        patterns.append("hidden_text")

    if BASE64_RE.search(text):
        patterns.append("base64_content")

    if PUNCTUATION_RE.search(text):
        patterns.append("excessive_punctuation")

    if len(text) > CAPS_MIN_LENGTH:
        caps = sum(1 for c in text if "A" <= c <= "Z")
        if caps / len(text) > CAPS_RATIO:
            patterns.append("excessive_caps")

    return patterns


def mentions_any(text: str, terms: Iterable[str]) -> bool:
    lower = (text or "").lower()
    return any(term in lower for term in terms)


def parse_email(email: EmailContent, max_chars: int = 20000) -> ParsedSignals:
    """Extract the plain text, links, named suspicious-pattern flags and pressure cues of an email body."""
    body = (email.body or "")[:max_chars]
    urls = extract_urls(body)
    return ParsedSignals(
        plain_text=body,
        urls=tuple(urls),
        domains=tuple(extract_domains(urls)),
        suspicious_patterns=tuple(detect_suspicious_patterns(body)),
        has_urgent_language=mentions_any(body, URGENT_TERMS),
        has_money_requests=mentions_any(body, MONEY_TERMS),
    )
