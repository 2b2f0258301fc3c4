import re
from typing import Dict, List, Optional, Sequence


SHORTENERS = ("bit.ly", "tinyurl.com", "goo.gl", "ow.ly", "t.co")
SUSPICIOUS_URL_TERMS = ("phishing", "verify", "login", "secure", "account", "reset", "update")
SUSPICIOUS_TLDS = (".xyz", ".top", ".club", ".work", ".click")
IPV4_RE = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}")

SHORTENER_POINTS = 4
IP_LITERAL_POINTS = 5
URL_TERM_POINTS = 2
URL_TLD_POINTS = 3


def _first_term(url: str) -> Optional[str]:
    lower = url.lower()
    return next((term for term in SUSPICIOUS_URL_TERMS if term in lower), None)


def analyze_urls(urls: Optional[Sequence[str]], domains: Optional[Sequence[str]]) -> Dict:
    urls = urls or ()
    domains = domains or ()
    reasons: List[str] = []
    score = 0.0

    for domain in domains:
        if any(s in domain.lower() for s in SHORTENERS):
            score += SHORTENER_POINTS
            reasons.append(f"URL shortener detected: {domain}")

    if any(IPV4_RE.search(url) for url in urls):
        score += IP_LITERAL_POINTS
        reasons.append("Direct IP address in URL")

    for url in urls:
        term = _first_term(url)
        if term:
            score += URL_TERM_POINTS
            reasons.append(f"Suspicious keyword in URL: {term}")

    for domain in domains:
        if domain.lower().endswith(SUSPICIOUS_TLDS):
            score += URL_TLD_POINTS
            reasons.append(f"Suspicious TLD in URL: {domain}")

    return {"score": score, "reasons": reasons, "count": len(urls)}
