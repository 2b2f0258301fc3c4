import pytest

from models.schemas import AttachmentInfo, EmailContent, ParsedSignals
from models.threat import EventType, ThreatLevel
from services.keyword_rules import KeywordRules
from services.threat_detector import ThreatDetector, threat_level_for_score


def _email(subject="", body="", sender="someone@example.com", attachments=()):
    return EmailContent(subject=subject, body=body, from_address=sender, attachments=tuple(attachments))


def test_account_suspension_email_is_phishing():
    email = _email(
        subject="URGENT: Verify Your Account Now!",
        body=(
            "Your account has been suspended due to unusual activity. "
            "Click here immediately to verify your identity and restore access."
        ),
        sender="security@example.com",
    )
    analysis = ThreatDetector().analyze(email)

    phishing_hits = [k for k in analysis.detected_keywords if k.startswith("[phishing]")]
    assert len(phishing_hits) >= 3
    assert analysis.score >= 6
    assert analysis.threat_level >= ThreatLevel.MEDIUM
    assert analysis.is_malicious is True
    assert analysis.event_type == EventType.PHISHING


def test_executable_attachment_alone_is_medium():
    email = _email(sender="billing@example.com", attachments=[AttachmentInfo(filename="invoice.exe")])
    analysis = ThreatDetector().analyze(email)

    assert analysis.score == 8
    assert analysis.threat_level == ThreatLevel.MEDIUM
    assert analysis.is_malicious is True
    assert analysis.metadata.has_attachments is True
    assert analysis.reasons == ("Dangerous attachment: invoice.exe",)


def test_empty_email_is_safe():
    analysis = ThreatDetector().analyze(_email())

    assert analysis.score == 0
    assert analysis.threat_level == ThreatLevel.SAFE
    assert analysis.is_malicious is False
    assert analysis.confidence == 0
    assert analysis.reasons == ()


def test_missing_fields_do_not_raise():
    email = EmailContent(subject=None, body=None, from_address=None, attachments=None)
    analysis = ThreatDetector().analyze(email, ParsedSignals(plain_text=None, urls=None, domains=None))
    assert analysis.score == 0


@pytest.mark.parametrize(
    "score, level",
    [
        (0, ThreatLevel.SAFE),
        (2.99, ThreatLevel.SAFE),
        (3, ThreatLevel.LOW),
        (5.99, ThreatLevel.LOW),
        (6, ThreatLevel.MEDIUM),
        (9.99, ThreatLevel.MEDIUM),
        (10, ThreatLevel.HIGH),
        (14.99, ThreatLevel.HIGH),
        (15, ThreatLevel.CRITICAL),
        (120, ThreatLevel.CRITICAL),
    ],
)
def test_threat_level_thresholds(score, level):
    assert threat_level_for_score(score) == level


def test_confidence_saturates_at_critical():
    analysis = ThreatDetector().analyze(_email(sender="win@scam-lottery-phishing.xyz"))
    assert analysis.score == 18
    assert analysis.threat_level == ThreatLevel.CRITICAL
    assert analysis.confidence == 1.0


def test_confidence_is_score_over_fifteen():
    analysis = ThreatDetector().analyze(_email(sender="x@noreply.example.com"))
    assert analysis.score == 5
    assert analysis.confidence == pytest.approx(5 / 15)


def test_signals_patterns_and_urls_are_scored():
    signals = ParsedSignals(
        plain_text="see link",
        urls=("http://192.168.1.20/login",),
        domains=("192.168.1.20",),
        suspicious_patterns=("hidden_text", "excessive_caps"),
    )
    analysis = ThreatDetector().analyze(_email(body="see link"), signals)

    # 2 patterns x 3, IP literal 5, URL term 2
    assert analysis.score == 13
    assert analysis.detected_patterns == ("hidden_text", "excessive_caps")
    assert analysis.metadata.suspicious_urls == ("http://192.168.1.20/login",)
    assert "Suspicious patterns: hidden_text, excessive_caps" in analysis.reasons


def test_category_multipliers():
    rules = KeywordRules(
        phishing=("qqphish",),
        spam=("qqspam",),
        malware=("qqmal",),
        social_engineering=("qqsocial",),
    )
    analysis = ThreatDetector(rules).analyze(_email(body="qqphish qqspam qqmal qqsocial"))
    assert analysis.score == 2 + 1 + 2.5 + 1.5
    assert analysis.event_type == EventType.MALWARE


def test_duplicate_keywords_recorded_once():
    rules = KeywordRules(phishing=("verify", "VERIFY", "verify"), spam=(), malware=(), social_engineering=())
    analysis = ThreatDetector(rules).analyze(_email(body="please verify, verify, verify"))
    assert analysis.detected_keywords == ("[phishing] verify",)
    assert analysis.score == 2


def test_tie_goes_to_earlier_category():
    rules = KeywordRules(
        phishing=("aa1",),
        spam=("bb1", "bb2"),
        malware=(),
        social_engineering=(),
    )
    analysis = ThreatDetector(rules).analyze(_email(body="aa1 bb1 bb2"))
    assert analysis.event_type == EventType.PHISHING


def test_strictly_greater_later_category_wins():
    rules = KeywordRules(
        phishing=("aa1",),
        spam=("bb1", "bb2", "bb3"),
        malware=(),
        social_engineering=(),
    )
    analysis = ThreatDetector(rules).analyze(_email(body="aa1 bb1 bb2 bb3"))
    assert analysis.event_type == EventType.SPAM


def test_social_engineering_ties_with_spam_keep_spam():
    rules = KeywordRules(
        phishing=(),
        spam=("bb1", "bb2", "bb3"),
        malware=(),
        social_engineering=("cc1", "cc2"),
    )
    analysis = ThreatDetector(rules).analyze(_email(body="bb1 bb2 bb3 cc1 cc2"))
    assert analysis.event_type == EventType.SPAM


def test_no_keywords_defaults_to_spam():
    assert ThreatDetector().analyze(_email()).event_type == EventType.SPAM


def test_batch_preserves_order():
    detector = ThreatDetector()
    emails = [
        _email(sender="a@example.com"),
        _email(attachments=[AttachmentInfo(filename="run.bat")]),
        _email(sender="win@scam-lottery-phishing.xyz"),
    ]
    sequential = [detector.analyze(e) for e in emails]

    assert detector.analyze_batch(emails) == sequential
    assert detector.analyze_batch(emails, max_workers=4) == sequential
    assert [a.score for a in sequential] == [0, 8, 18]


def test_batch_of_nothing():
    assert ThreatDetector().analyze_batch([]) == []
    assert ThreatDetector().analyze_batch([], max_workers=4) == []
