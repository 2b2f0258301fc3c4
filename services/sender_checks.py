from typing import Dict, List, Optional


SUSPICIOUS_DOMAIN_WORDS = ("suspicious", "phishing", "scam", "lottery", "fake", "noreply")
SUSPICIOUS_SENDER_TLDS = (".xyz", ".top", ".club", ".work", ".click", ".tk", ".ml", ".ga")
MAX_DOMAIN_DIGITS = 3

DOMAIN_WORD_POINTS = 5
SENDER_TLD_POINTS = 3
DIGIT_POINTS = 2


def extract_domain(email: Optional[str]) -> str:
    if not email or "@" not in email:
        return ""
    return email.split("@")[1].lower().strip()


def analyze_sender(from_address: Optional[str]) -> Dict:
    reasons: List[str] = []
    score = 0.0

    domain = extract_domain(from_address)
    if not domain:
        return {"score": score, "reasons": reasons, "domain": ""}

    for word in SUSPICIOUS_DOMAIN_WORDS:
        if word in domain:
            score += DOMAIN_WORD_POINTS
            reasons.append(f"Suspicious domain keyword: {word} in {domain}")

    for tld in SUSPICIOUS_SENDER_TLDS:
        if domain.endswith(tld):
            score += SENDER_TLD_POINTS
            reasons.append(f"Suspicious TLD: {tld}")

    digits = sum(1 for c in domain if c.isdigit())
    if digits > MAX_DOMAIN_DIGITS:
        score += DIGIT_POINTS
        reasons.append(f"Unusual number of digits in domain: {digits}")

    return {"score": score, "reasons": reasons, "domain": domain}
